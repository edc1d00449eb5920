import math

from PIL import Image


def page_count(bitmap_size: tuple[int, int], page_size: tuple[float, float]) -> int:
    """Pages needed to show the bitmap at full page width."""
    width, height = bitmap_size
    page_width, page_height = page_size
    if width <= 0 or height <= 0:
        raise ValueError(f"Invalid bitmap size: {bitmap_size}")
    image_height = page_width * height / width
    if image_height <= page_height:
        return 1
    # Rounded so an exact multiple of the page height does not add a page.
    return math.ceil(round(image_height / page_height, 6))


def paginate(bitmap: Image.Image, page_size: tuple[float, float]) -> list[Image.Image]:
    """Split a tall bitmap into equal horizontal bands, one per output page."""
    count = page_count(bitmap.size, page_size)
    if count == 1:
        return [bitmap]
    band_height = bitmap.height / count
    return [
        bitmap.crop(
            (0, round(i * band_height), bitmap.width, round((i + 1) * band_height))
        )
        for i in range(count)
    ]
