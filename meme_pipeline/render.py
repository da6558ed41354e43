import base64
import binascii
import io
from pathlib import Path
from typing import List, Tuple

from PIL import Image, ImageDraw, ImageFont


def to_data_uri(media_type: str, data: bytes) -> str:
    return f"data:{media_type};base64,{base64.b64encode(data).decode('ascii')}"


def decode_data_uri(uri: str) -> Tuple[str, bytes]:
    """
    Split a base64 data URI into its media type and raw bytes.
    """
    header, sep, payload = uri.partition(",")
    if not sep or not header.startswith("data:") or not header.endswith(";base64"):
        raise ValueError("Not a base64 data URI.")
    media_type = header[len("data:"):-len(";base64")]
    try:
        return media_type, base64.b64decode(payload, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 payload in data URI: {e}") from e


def save_meme_image(result, path: Path, burn_caption: bool = False) -> Path:
    """
    Write the meme image of a `MemeResult` to `path`.

    With `burn_caption`, the caption is drawn onto the bottom of the image.
    The output format follows the file suffix (PNG when there is none).
    """
    _, data = decode_data_uri(result.image_url)
    img = Image.open(io.BytesIO(data)).convert("RGB")
    if burn_caption:
        img = overlay_caption(img, result.caption)

    path.parent.mkdir(parents=True, exist_ok=True)
    fmt = None if path.suffix else "PNG"
    img.save(path, format=fmt)
    return path


def overlay_caption(img: Image.Image, caption: str) -> Image.Image:
    """
    Render the caption centred at the bottom of the image, on top of a dark
    gradient so white text stays readable on any background.
    """
    img = img.convert("RGBA")
    w, h = img.size

    font_size = max(12, int(min(w, h) * 0.06))
    font = _load_font(size=font_size)
    margin_x = int(w * 0.06)
    line_spacing = max(4, font_size // 5)

    measure = ImageDraw.Draw(img)
    lines = _wrap_text(measure, caption, font, w - 2 * margin_x)
    line_height = font.getbbox("Ag")[3]
    block_height = len(lines) * (line_height + line_spacing)

    overlay = Image.new("RGBA", (w, h), (0, 0, 0, 0))
    draw = ImageDraw.Draw(overlay)

    # Gradient at the bottom for readability
    gradient_height = min(h, block_height + int(h * 0.15))
    for i in range(gradient_height):
        alpha = int(200 * (i / gradient_height))
        draw.line(
            [(0, h - gradient_height + i), (w, h - gradient_height + i)],
            fill=(0, 0, 0, alpha),
        )

    img = Image.alpha_composite(img, overlay)
    draw = ImageDraw.Draw(img)

    y = h - block_height - int(h * 0.04)
    for line in lines:
        x = (w - draw.textlength(line, font=font)) / 2
        draw.text(
            (x, y),
            line,
            font=font,
            fill=(255, 255, 255),
            stroke_width=max(1, font_size // 15),
            stroke_fill=(0, 0, 0),
        )
        y += line_height + line_spacing

    return img.convert("RGB")


def _wrap_text(
    draw: ImageDraw.ImageDraw, text: str, font: ImageFont.ImageFont, max_width: int
) -> List[str]:
    words = text.split()
    lines: List[str] = []
    current = ""
    for word in words:
        test = f"{current} {word}".strip()
        if draw.textlength(test, font=font) <= max_width or not current:
            current = test
        else:
            lines.append(current)
            current = word
    if current:
        lines.append(current)
    return lines


def _load_font(size: int) -> ImageFont.FreeTypeFont:
    """
    Load a bold TrueType font, trying a bundled fonts/ folder first and then
    common system locations.
    """
    project_root = Path(__file__).parent.parent
    fonts_dir = project_root / "fonts"
    candidates = sorted(fonts_dir.glob("*.ttf")) if fonts_dir.exists() else []
    candidates += [
        # macOS
        Path("/System/Library/Fonts/Supplemental/Impact.ttf"),
        Path("/System/Library/Fonts/Supplemental/Arial Bold.ttf"),
        # Linux
        Path("/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf"),
        Path("/usr/share/fonts/truetype/liberation/LiberationSans-Bold.ttf"),
        # Windows
        Path("C:/Windows/Fonts/impact.ttf"),
        Path("C:/Windows/Fonts/arialbd.ttf"),
    ]

    for font_file in candidates:
        try:
            return ImageFont.truetype(str(font_file), size=size)
        except OSError:
            continue

    return ImageFont.load_default(size=size)
