"""
Config loader for PaperBurn.
Loads YAML configuration with dataclass validation.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import yaml


class ConfigError(ValueError):
    """Raised when a configuration value is out of range."""


@dataclass
class CameraConfig:
    device_id: int = 0
    width: int = 1280
    height: int = 720
    fps: int = 30
    mirror: bool = True


@dataclass
class MediaPipeConfig:
    max_num_hands: int = 1
    min_detection_confidence: float = 0.5
    min_tracking_confidence: float = 0.5
    model_path: Optional[str] = None


@dataclass
class GestureConfig:
    fist_min_curled: int = 3          # Curled fingers (of 4) needed for FIST
    hold_frames: int = 5              # CRUMPLE fires once the fist run exceeds this
    proximity_far_area: float = 0.05  # Bounding-box area mapped to proximity 0
    proximity_near_area: float = 0.30 # Bounding-box area mapped to proximity 1
    burn_proximity: float = 0.15      # Open palm must be closer than this to burn


@dataclass
class PaperConfig:
    shake_ms: int = 400
    burn_ms: int = 2500
    spark_count: int = 40
    spark_seed: Optional[int] = None


@dataclass
class UIConfig:
    show_preview: bool = True
    debug_overlay: bool = False
    window_width: int = 900
    window_height: int = 700


@dataclass
class Config:
    camera: CameraConfig = field(default_factory=CameraConfig)
    mediapipe: MediaPipeConfig = field(default_factory=MediaPipeConfig)
    gestures: GestureConfig = field(default_factory=GestureConfig)
    paper: PaperConfig = field(default_factory=PaperConfig)
    ui: UIConfig = field(default_factory=UIConfig)

    def validate(self) -> "Config":
        """Check cross-field constraints. Returns self for chaining."""
        if self.camera.fps <= 0:
            raise ConfigError(f"camera fps must be positive, got {self.camera.fps}")

        g = self.gestures
        if not 1 <= g.fist_min_curled <= 4:
            raise ConfigError(f"fist_min_curled must be 1-4, got {g.fist_min_curled}")
        if g.hold_frames < 0:
            raise ConfigError(f"hold_frames must be >= 0, got {g.hold_frames}")
        if g.proximity_near_area <= g.proximity_far_area:
            raise ConfigError(
                "proximity_near_area must be greater than proximity_far_area "
                f"({g.proximity_near_area} <= {g.proximity_far_area})"
            )
        if not 0.0 <= g.burn_proximity <= 1.0:
            raise ConfigError(f"burn_proximity must be within [0, 1], got {g.burn_proximity}")

        p = self.paper
        if p.shake_ms < 0 or p.burn_ms < 0:
            raise ConfigError("shake_ms and burn_ms must be non-negative")
        if p.spark_count < 0:
            raise ConfigError(f"spark_count must be >= 0, got {p.spark_count}")
        return self


def _dict_to_dataclass(cls, data: dict):
    """Convert a dict to a dataclass, ignoring unknown keys."""
    if data is None:
        return cls()
    field_names = {f.name for f in cls.__dataclass_fields__.values()}
    filtered = {k: v for k, v in data.items() if k in field_names}
    return cls(**filtered)


def load_config(config_path: Optional[Path] = None) -> Config:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, uses default config.yaml
                    in project root.

    Returns:
        Config dataclass with all settings.

    Raises:
        ConfigError: if a loaded value is out of range.
    """
    if config_path is None:
        # Default to config.yaml in project root
        config_path = Path(__file__).parent.parent.parent / "config.yaml"

    config_path = Path(config_path)

    if not config_path.exists():
        # Return defaults if no config file
        return Config()

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f) or {}

    return Config(
        camera=_dict_to_dataclass(CameraConfig, data.get('camera')),
        mediapipe=_dict_to_dataclass(MediaPipeConfig, data.get('mediapipe')),
        gestures=_dict_to_dataclass(GestureConfig, data.get('gestures')),
        paper=_dict_to_dataclass(PaperConfig, data.get('paper')),
        ui=_dict_to_dataclass(UIConfig, data.get('ui')),
    ).validate()
