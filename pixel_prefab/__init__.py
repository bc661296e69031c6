"""
Pixel Prefab - Convert pixel art (static or animated) into rectangle prefabs
"""

import logging
from pathlib import Path
from typing import Optional, Union

from .core import (
    RawImage, ImageLoader, ExportSettings, Prefab, PrefabExporter,
    build_palette, index_image, decompose_image, build_prefab_rects, create_prefab,
)

__version__ = "0.1.0"
__all__ = [
    'RawImage',
    'ImageLoader',
    'ExportSettings',
    'Prefab',
    'PrefabExporter',
    'generate_prefab',
    'convert',
]

logger = logging.getLogger(__name__)


def generate_prefab(
    image: RawImage,
    settings: Optional[ExportSettings] = None,
    max_workers: Optional[int] = None
) -> Prefab:
    """
    Run the full pipeline on an in-memory image.

    Args:
        image: Decoded RGBA frames
        settings: Export settings (defaults if None)
        max_workers: Thread pool size for per-frame decomposition

    Returns:
        The prefab object graph
    """
    settings = settings or ExportSettings()

    palette = build_palette(image)
    indexed = index_image(image, palette)
    rect_image = decompose_image(indexed, max_workers=max_workers)

    prefab_rects = build_prefab_rects(
        rect_image,
        pixels_per_unit=settings.pixels_per_unit,
        horizontal_alignment=settings.horizontal_alignment,
        vertical_alignment=settings.vertical_alignment,
        speed=settings.speed,
        looped=settings.looped,
        lifetime=settings.lifetime,
        slot_policy=settings.slot_policy
    )

    logger.info(
        "%d frame(s), %d palette color(s), %d slot(s)",
        len(image.frames), len(palette), len(prefab_rects)
    )
    logger.debug("Palette: %s", " ".join(palette.to_hex()))

    return create_prefab(
        settings.name,
        settings.description,
        settings.prefab_type,
        settings.lifetime,
        settings.depth,
        settings.use_hit_objects,
        prefab_rects,
        settings.seed,
        palette=palette.colors
    )


def convert(
    image_path: Union[str, Path],
    output_path: Union[str, Path, None] = None,
    settings: Optional[ExportSettings] = None
) -> Path:
    """
    Load an image file, convert it and write a .vgp prefab plus its
    <name>.palette.json listing next to it.

    Args:
        image_path: Path to the source image
        output_path: Output path (<image>.vgp next to the image if None)
        settings: Export settings (defaults if None)

    Returns:
        Path to the written prefab
    """
    image = ImageLoader.load(image_path)
    prefab = generate_prefab(image, settings)

    if output_path is None:
        output_path = PrefabExporter.default_path(image_path)

    vgp_path = PrefabExporter.to_vgp(prefab, output_path)
    PrefabExporter.to_palette(prefab, PrefabExporter.palette_path(vgp_path))
    return vgp_path
