"""Raster sources: turn images and text into RGBA pixel buffers.

AIDEV-NOTE: Everything here is Pillow glue. The quantizer only ever sees
the RGBA bytes produced by these functions, so swapping the rasterizer
does not affect the encoded output format.
"""

from pathlib import Path

from PIL import Image, ImageDraw, ImageFont, ImageOps, UnidentifiedImageError

from models import TextSource

from .utils import InvalidSourceError

BACKGROUND = (255, 255, 255, 255)  # light canvas for text
FOREGROUND = (0, 0, 0, 255)  # dark glyphs


def load_image(file_path: str | Path) -> Image.Image:
    """Load an image file as RGBA.

    Args:
        file_path: Path to image file (PNG, JPG, BMP, ...)

    Returns:
        PIL Image in RGBA mode with EXIF orientation applied

    Raises:
        InvalidSourceError: If the file cannot be read or decoded
    """
    try:
        image = Image.open(file_path)
        image = ImageOps.exif_transpose(image)
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        return image
    except (OSError, UnidentifiedImageError) as e:
        raise InvalidSourceError(f"Failed to load image: {e}") from e


def image_to_rgba(
    image: Image.Image,
    width: int,
    height: int,
    resample: Image.Resampling = Image.Resampling.BILINEAR,
) -> bytes:
    """Scale an image to exactly width x height and return its RGBA bytes.

    AIDEV-NOTE: Aspect ratio is NOT preserved - the LCD target size wins.
    """
    if width <= 0 or height <= 0:
        raise InvalidSourceError(f"Invalid target size: {width}x{height}")

    rgba = image.convert("RGBA")
    if rgba.size != (width, height):
        rgba = rgba.resize((width, height), resample)
    return rgba.tobytes()


def load_font(font_family: str, font_size: int) -> ImageFont.ImageFont:
    """Load a TrueType font by file name or family, falling back to default.

    Font availability is not validated: an unknown family silently renders
    with Pillow's bundled font.
    """
    candidates = [font_family]
    if not Path(font_family).suffix:
        candidates.append(f"{font_family}.ttf")

    for candidate in candidates:
        try:
            return ImageFont.truetype(candidate, size=font_size)
        except OSError:
            continue
    return ImageFont.load_default(size=font_size)


def text_to_rgba(source: TextSource, width: int, height: int) -> bytes:
    """Render text centred on a light canvas and return its RGBA bytes.

    Raises:
        InvalidSourceError: If the text is empty or the size is invalid
    """
    if not source.text:
        raise InvalidSourceError("No text to render")
    if width <= 0 or height <= 0:
        raise InvalidSourceError(f"Invalid target size: {width}x{height}")

    canvas = Image.new("RGBA", (width, height), BACKGROUND)
    draw = ImageDraw.Draw(canvas)
    font = load_font(source.font_family, source.font_size)

    # Pillow has no weight axis for plain TTFs; bold is emulated with a stroke
    stroke = 1 if source.font_weight == "bold" else 0
    draw.text(
        (width / 2, height / 2),
        source.text,
        font=font,
        fill=FOREGROUND,
        anchor="mm",
        stroke_width=stroke,
        stroke_fill=FOREGROUND,
    )
    return canvas.tobytes()
