"""Tests for scene description parsing."""

import pytest
import json
from pathlib import Path

from luma.vec3 import Vec3, Point3
from luma.shapes import Sphere, Scene
from luma.camera import Camera
from luma.renderer import RenderSettings
from luma.scene_parser import (
    SceneParser, SceneParseError, OutputSettings,
    default_scene, load_scene, parse_scene
)

SCENES_DIR = Path(__file__).parent.parent / "scenes"


class TestParseDict:
    """Test parsing scene dictionaries."""

    def test_full_scene(self):
        scene, camera, settings, output = parse_scene({
            'camera': {'aspect_ratio': 1.5},
            'render': {
                'width': 30,
                'height': 20,
                'samples': 4,
                'max_depth': 3,
                'threads': 2,
                'seed': 9,
                'sampler': 'Sobol',
                'hemisphere': 'uniform',
                'mode': 'normals',
                'progress_interval': 0.5,
            },
            'output': {'path': 'renders/out.png', 'scale': 4},
            'objects': [
                {'type': 'sphere', 'center': [0, 0, -1], 'radius': 0.5},
                {'type': 'sphere', 'center': {'x': 0, 'y': -100.5, 'z': -1}, 'radius': 100},
            ],
        })

        assert len(scene) == 2
        spheres = list(scene)
        assert spheres[0].center == Point3(0, 0, -1)
        assert spheres[1].center == Point3(0, -100.5, -1)
        assert spheres[1].radius == 100.0

        assert camera.lower_left_corner == Point3(-1.5, -1, -1)

        assert settings.width == 30
        assert settings.height == 20
        assert settings.samples_per_pixel == 4
        assert settings.max_depth == 3
        assert settings.num_threads == 2
        assert settings.seed == 9
        assert settings.sampler == 'sobol'
        assert settings.hemisphere == 'uniform'
        assert settings.mode == 'normals'
        assert settings.progress_interval == 0.5

        assert output == OutputSettings('renders/out.png', 4)

    def test_defaults(self):
        scene, camera, settings, output = parse_scene({})

        assert len(scene) == 0
        assert settings.width == RenderSettings().width
        assert settings.samples_per_pixel == 16
        assert output == OutputSettings()

    def test_default_aspect_from_resolution(self):
        _, camera, _, _ = parse_scene({'render': {'width': 200, 'height': 100}})
        assert camera.horizontal == Vec3(4, 0, 0)

    def test_null_sections(self):
        _, camera, settings, _ = parse_scene({'render': None, 'camera': None})
        assert isinstance(camera, Camera)
        assert isinstance(settings, RenderSettings)

    def test_null_seed(self):
        _, _, settings, _ = parse_scene({'render': {'seed': None}})
        assert settings.seed is None

    def test_type_defaults_to_sphere(self):
        scene, _, _, _ = parse_scene({'objects': [{'center': [1, 2, 3], 'radius': 2}]})
        sphere = list(scene)[0]
        assert isinstance(sphere, Sphere)
        assert sphere.center == Point3(1, 2, 3)


class TestParseErrors:
    """Invalid descriptions raise SceneParseError."""

    @pytest.mark.parametrize("data", [
        {'objects': [{'type': 'cube'}]},
        {'objects': {'type': 'sphere'}},
        {'objects': [{'type': 'sphere', 'center': [0, 0]}]},
        {'objects': [{'type': 'sphere', 'center': 'origin'}]},
        {'objects': [{'type': 'sphere', 'radius': -1}]},
        {'render': {'samples': 0}},
        {'render': {'width': 'wide'}},
        {'render': {'sampler': 'halton'}},
        {'render': {'mode': 'wireframe'}},
        {'camera': {'aspect_ratio': 0}},
        {'output': {'scale': 0}},
        {'objects': ['sphere']},
        {'objects': [{'type': 5}]},
        {'camera': 5},
        {'render': [240, 135]},
        {'output': 'out.png'},
    ])
    def test_invalid(self, data):
        with pytest.raises(SceneParseError):
            parse_scene(data)


class TestSceneFiles:
    """Test loading scene files."""

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "scene.yaml"
        path.write_text(
            "render:\n"
            "  width: 8\n"
            "  height: 4\n"
            "objects:\n"
            "  - type: sphere\n"
            "    center: [0, 0, -2]\n"
            "    radius: 1\n"
        )

        scene, camera, settings, _ = load_scene(path)

        assert len(scene) == 1
        assert settings.width == 8
        assert camera.horizontal == Vec3(4, 0, 0)

    def test_json_file(self, tmp_path):
        path = tmp_path / "scene.json"
        path.write_text(json.dumps({
            'render': {'samples': 2},
            'objects': [{'type': 'sphere', 'center': [0, 0, -1], 'radius': 0.5}],
        }))

        scene, _, settings, _ = load_scene(path)

        assert len(scene) == 1
        assert settings.samples_per_pixel == 2

    def test_missing_file(self, tmp_path):
        with pytest.raises(SceneParseError):
            load_scene(tmp_path / "missing.yaml")

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("objects: [unclosed\n")
        with pytest.raises(SceneParseError):
            load_scene(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(SceneParseError):
            load_scene(path)

    def test_bundled_default_scene(self):
        scene, camera, settings, output = load_scene(SCENES_DIR / "default.yaml")

        assert len(scene) == 2
        assert settings.width == 240
        assert settings.height == 135
        assert output.scale == 16

    def test_parser_instance(self, tmp_path):
        path = tmp_path / "scene.yml"
        path.write_text("objects: []\n")
        parser = SceneParser()
        scene, _, _, _ = parser.parse_file(str(path))
        assert scene is parser.objects
        assert len(scene) == 0


class TestDefaultScene:
    """Test the built-in scene."""

    def test_contents(self):
        scene = default_scene()
        assert isinstance(scene, Scene)
        spheres = list(scene)
        assert len(spheres) == 2
        assert spheres[0].center == Point3(0, 0, -1)
        assert spheres[0].radius == 0.5
        assert spheres[1].center == Point3(0, -100.5, -1)
        assert spheres[1].radius == 100.0
