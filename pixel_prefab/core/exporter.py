"""
Prefab Exporter - Writes prefabs to the editor's .vgp JSON format

Color keyframes only carry palette indices, so the palette is written
alongside as <name>.palette.json: a list of "#rrggbb" strings where list
position == palette index.
"""

import json
from pathlib import Path
from typing import List, Union
from .color import color_hex
from .prefab import Prefab


class PrefabExporter:
    """Exports prefabs to files"""

    EXTENSION = '.vgp'
    PALETTE_SUFFIX = '.palette.json'

    @classmethod
    def to_json(cls, prefab: Prefab, indent: int = None) -> str:
        """Serialize a prefab to a JSON string"""
        return json.dumps(prefab.to_dict(), indent=indent)

    @classmethod
    def to_vgp(cls, prefab: Prefab, path: Union[str, Path], indent: int = None) -> Path:
        """Export a prefab to a .vgp file"""
        path = Path(path)
        if path.suffix.lower() != cls.EXTENSION:
            path = path.with_suffix(cls.EXTENSION)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w') as f:
            f.write(cls.to_json(prefab, indent=indent))

        return path

    @classmethod
    def palette_listing(cls, prefab: Prefab) -> List[str]:
        """Hex colors in palette index order"""
        return [color_hex(c) for c in prefab.palette]

    @classmethod
    def to_palette(cls, prefab: Prefab, path: Union[str, Path]) -> Path:
        """Export the prefab's palette listing to a JSON file"""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w') as f:
            json.dump(cls.palette_listing(prefab), f, indent=2)

        return path

    @classmethod
    def palette_path(cls, vgp_path: Union[str, Path]) -> Path:
        """<name>.palette.json next to a .vgp file"""
        vgp_path = Path(vgp_path)
        return vgp_path.parent / f"{vgp_path.stem}{cls.PALETTE_SUFFIX}"

    @classmethod
    def default_path(cls, image_path: Union[str, Path]) -> Path:
        """<image name>.vgp next to the source image"""
        image_path = Path(image_path)
        return image_path.parent / f"{image_path.stem}{cls.EXTENSION}"
