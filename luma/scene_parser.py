"""
Scene description parser.

Supports a YAML (or JSON) scene description format with:
- Camera configuration
- Render settings
- Output options
- Objects (spheres)

Example scene file:
```yaml
camera:
  aspect_ratio: 1.777  # defaults to width / height

render:
  width: 240
  height: 135
  samples: 16
  max_depth: 10
  sampler: sobol

output:
  path: output.png
  scale: 16

objects:
  - type: sphere
    center: [0, 0, -1]
    radius: 0.5

  - type: sphere
    center: [0, -100.5, -1]
    radius: 100
```
"""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple, Union
import json
import logging

import yaml

from .vec3 import Vec3, Point3
from .camera import Camera
from .shapes import Sphere, Scene
from .renderer import RenderSettings

logger = logging.getLogger(__name__)


class SceneParseError(Exception):
    """Error during scene parsing."""
    pass


@dataclass
class OutputSettings:
    """Where and how the finished image is written."""
    path: str = 'output.png'
    scale: int = 1


ParseResult = Tuple[Scene, Camera, RenderSettings, OutputSettings]


def _optional_int(value: Any) -> Optional[int]:
    return None if value is None else int(value)


def _name(value: Any) -> str:
    return str(value).lower()


# Scene file key -> (RenderSettings field, converter)
_SETTINGS_KEYS: Dict[str, Tuple[str, Callable[[Any], Any]]] = {
    'width': ('width', int),
    'height': ('height', int),
    'samples': ('samples_per_pixel', int),
    'max_depth': ('max_depth', int),
    'threads': ('num_threads', int),
    'seed': ('seed', _optional_int),
    'sampler': ('sampler', _name),
    'hemisphere': ('hemisphere', _name),
    'mode': ('mode', _name),
    'progress_interval': ('progress_interval', float),
}


def _require_mapping(data: Any, section: str) -> None:
    if not isinstance(data, dict):
        raise SceneParseError(f"'{section}' must be a mapping, got: {data!r}")


def default_scene() -> Scene:
    """Create the default scene: a small sphere resting on a huge ground sphere."""
    scene = Scene()
    scene.add(Sphere(Point3(0.0, 0.0, -1.0), 0.5))
    scene.add(Sphere(Point3(0.0, -100.5, -1.0), 100.0))
    return scene


class SceneParser:
    """Parser for scene description files."""

    def __init__(self):
        self.objects: Scene = Scene()
        self.camera: Optional[Camera] = None
        self.settings: Optional[RenderSettings] = None
        self.output: OutputSettings = OutputSettings()

    def parse_file(self, filepath: Union[str, Path]) -> ParseResult:
        """Parse a scene file.

        Args:
            filepath: Path to the scene file (YAML or JSON)

        Returns:
            Tuple of (scene, camera, settings, output)
        """
        path = Path(filepath)
        if not path.exists():
            raise SceneParseError(f"Scene file not found: {filepath}")

        content = path.read_text()
        logger.debug("Loading scene from %s", path)

        try:
            if path.suffix == '.json':
                data = json.loads(content)
            else:
                # YAML is a superset of JSON
                data = yaml.safe_load(content)
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise SceneParseError(f"Cannot read scene file {filepath}: {e}") from e

        if not isinstance(data, dict):
            raise SceneParseError(f"Scene file must contain a mapping: {filepath}")

        return self.parse_dict(data)

    def parse_dict(self, data: Dict[str, Any]) -> ParseResult:
        """Parse a scene from a dictionary.

        Args:
            data: Scene description dictionary

        Returns:
            Tuple of (scene, camera, settings, output)
        """
        try:
            if 'objects' in data:
                self._parse_objects(data['objects'])

            # Settings before camera: the default aspect ratio comes from them
            self._parse_settings(data.get('render') or {})
            self._parse_camera(data.get('camera') or {})

            if 'output' in data:
                self._parse_output(data['output'])
        except (ValueError, TypeError, KeyError) as e:
            raise SceneParseError(str(e)) from e

        return self.objects, self.camera, self.settings, self.output

    def _parse_vec3(self, data: Any) -> Vec3:
        """Parse a Vec3 from various formats."""
        if isinstance(data, (list, tuple)):
            if len(data) != 3:
                raise SceneParseError(f"Vec3 must have 3 components, got {len(data)}")
            return Vec3(float(data[0]), float(data[1]), float(data[2]))
        elif isinstance(data, dict):
            return Vec3(
                float(data.get('x', 0)),
                float(data.get('y', 0)),
                float(data.get('z', 0))
            )
        else:
            raise SceneParseError(f"Cannot parse Vec3 from: {data}")

    def _parse_objects(self, objects_data: list) -> None:
        """Parse objects section."""
        if not isinstance(objects_data, list):
            raise SceneParseError("'objects' must be a list")

        for obj_data in objects_data:
            if not isinstance(obj_data, dict):
                raise SceneParseError(f"Object entry must be a mapping, got: {obj_data!r}")
            obj_type = str(obj_data.get('type', 'sphere')).lower()

            if obj_type == 'sphere':
                center = self._parse_vec3(obj_data.get('center', [0, 0, 0]))
                radius = float(obj_data.get('radius', 1.0))
                self.objects.add(Sphere(center, radius))

            else:
                raise SceneParseError(f"Unknown object type: {obj_type}")

    def _parse_camera(self, camera_data: Dict[str, Any]) -> None:
        """Parse camera section."""
        _require_mapping(camera_data, 'camera')
        default_aspect = self.settings.width / self.settings.height
        aspect_ratio = float(camera_data.get('aspect_ratio', default_aspect))
        self.camera = Camera(aspect_ratio)

    def _parse_settings(self, settings_data: Dict[str, Any]) -> None:
        """Parse render settings section."""
        _require_mapping(settings_data, 'render')
        kwargs = {}
        for key, (field_name, convert) in _SETTINGS_KEYS.items():
            if key in settings_data:
                kwargs[field_name] = convert(settings_data[key])
        self.settings = RenderSettings(**kwargs)

    def _parse_output(self, output_data: Dict[str, Any]) -> None:
        """Parse output section."""
        _require_mapping(output_data, 'output')
        scale = int(output_data.get('scale', 1))
        if scale < 1:
            raise SceneParseError(f"Output scale must be at least 1, got {scale}")
        self.output = OutputSettings(
            path=str(output_data.get('path', self.output.path)),
            scale=scale
        )


def load_scene(filepath: Union[str, Path]) -> ParseResult:
    """Convenience function to load a scene file.

    Args:
        filepath: Path to the scene file

    Returns:
        Tuple of (scene, camera, settings, output)
    """
    parser = SceneParser()
    return parser.parse_file(filepath)


def parse_scene(data: Dict[str, Any]) -> ParseResult:
    """Convenience function to parse a scene from a dictionary.

    Args:
        data: Scene description dictionary

    Returns:
        Tuple of (scene, camera, settings, output)
    """
    parser = SceneParser()
    return parser.parse_dict(data)
