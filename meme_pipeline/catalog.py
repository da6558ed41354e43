import random
from typing import Dict, Optional, Tuple


TRENDING_TOPICS: Dict[str, Tuple[str, ...]] = {
    "Social Issues": (
        "rising prices",
        "housing prices",
        "air pollution",
        "the job hunt",
        "low birth rates",
    ),
    "Work Culture": (
        "mandatory team dinners",
        "overtime culture",
        "the daily lunch decision",
        "a boss's boomer moment",
        "the Monday blues",
        "performance pressure",
    ),
    "Daily Life": (
        "the latest food craze",
        "everyone's MBTI obsession",
        "a food delivery fail",
        "a gym membership that's just for show",
        "the YouTube algorithm rabbit hole",
        "running out of photo booth poses",
    ),
    "Relationships": (
        "being left on read",
        "cutting off toxic friends",
        "vague plans that never happen",
        "the 'who pays for what' debate",
        "how much to give for a wedding gift",
    ),
    "Tech & Media": (
        "the new iPhone release",
        "how good AI art is getting",
        "streaming service price hikes",
        "not being able to live without YouTube Premium",
        "smartphone addiction",
    ),
}

REACTION_TYPES: Tuple[str, ...] = (
    "reacting to",
    "getting mad at",
    "celebrating",
    "confused about",
    "sad about",
    "shocked by",
    "emotional about",
    "laughing at",
)


class ScenarioSelector:
    """
    Builds offline meme scenarios from the static topic catalog.

    Every draw is independent (sampling with replacement). Pass a seeded
    `random.Random` to get reproducible scenarios.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()

    def sample(self) -> str:
        category = self.rng.choice(list(TRENDING_TOPICS))
        topic = self.rng.choice(TRENDING_TOPICS[category])
        return f"{self.sample_reaction()} {topic}"

    def sample_reaction(self) -> str:
        return self.rng.choice(REACTION_TYPES)
