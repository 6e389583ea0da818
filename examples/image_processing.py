"""
Example: Geometric Transformations with TransformKit

This example demonstrates how to:
- Correct EXIF orientation and produce fixed-size thumbnails
- Resize while keeping proportions
- Use the geometry functions on their own
"""
from pathlib import Path
from transformkit import (
    HandlerConfig,
    calc_aspect_ratio,
    calc_crop_coords,
    get_handler,
    reproportion,
)


def make_thumbnails(image_path: Path, backend: str = "pillow"):
    """Upright square thumbnail plus a proportional preview."""
    config = HandlerConfig(resample="bicubic")

    handler = get_handler(backend, config).with_file(image_path)
    thumb = handler.reorient(silent=True).fit(300, 300, "center").save(
        image_path.with_name(f"{image_path.stem}_thumb.jpg"), quality=85
    )
    print(f"Thumbnail: {thumb} ({handler.width}x{handler.height})")
    handler.close()

    handler = get_handler(backend, config).with_file(image_path)
    preview = handler.reorient(silent=True).resize(1280, 1280, maintain_ratio=True).save(
        image_path.with_name(f"{image_path.stem}_preview.jpg")
    )
    print(f"Preview: {preview} ({handler.width}x{handler.height})")
    print(f"Backend version: {handler.get_version()}")
    handler.close()


def show_geometry(width: int, height: int):
    """Print the numbers a fit and a proportional resize resolve to."""
    print(f"Source: {width}x{height}")

    w, h, master = reproportion(800, 800, width, height)
    print(f"resize(800, 800, maintain_ratio=True) -> {w}x{h} (master: {master.value})")

    crop_w, crop_h = calc_aspect_ratio(800, None, width, height)
    x, y = calc_crop_coords(crop_w, crop_h, width, height, "center")
    print(f"fit(800) -> crop {crop_w}x{crop_h} at ({x}, {y})")


if __name__ == "__main__":
    import sys

    if len(sys.argv) < 2:
        print("Usage: python image_processing.py <image_path> [pillow|imagemagick]")
        sys.exit(1)

    image_path = Path(sys.argv[1])
    if not image_path.exists():
        print(f"Image not found: {image_path}")
        sys.exit(1)

    backend = sys.argv[2] if len(sys.argv) > 2 else "pillow"
    show_geometry(4000, 3000)
    make_thumbnails(image_path, backend)
