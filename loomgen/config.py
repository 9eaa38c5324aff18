"""
Configuration Module

Dataclasses describing a looming experiment: which trajectory model to build and how
the resulting animation is drawn. Model configurations are looked up by their ``type``
key, so a YAML ``model`` section maps directly onto one of them.
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional, Union

from .core.errors import InvalidParameter
from .core.results import ModelResult
from .models.constant_speed import constant_speed_model
from .models.diameter import ExpansionMode, diameter_model


def _checked_fields(cls, config: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``config``, raising InvalidParameter on keys ``cls`` does not have."""
    names = {f.name for f in fields(cls)}
    unknown = sorted(str(k) for k in config if k not in names)
    if unknown:
        raise InvalidParameter(
            f"Unknown {cls.__name__} key(s): {', '.join(unknown)}; "
            f"expected some of: {', '.join(sorted(names))}"
        )
    return dict(config)


@dataclass
class ModelConfig:
    """Base configuration for all trajectory models."""

    type: str

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "ModelConfig":
        """Create the config class registered for ``config['type']``."""
        model_type = config.get("type")
        config_class = MODEL_CONFIG_TYPES.get(model_type)
        if config_class is None:
            allowed = ", ".join(MODEL_CONFIG_TYPES)
            raise InvalidParameter(
                f"Unknown model type {model_type!r}; expected one of: {allowed}"
            )
        return config_class(**_checked_fields(config_class, config))

    def build(self) -> ModelResult:
        raise NotImplementedError


@dataclass
class ConstantSpeedModelConfig(ModelConfig):
    """Configuration for an approach at constant speed."""

    type: str = "constant_speed"
    screen_distance: float = 20
    frame_rate: float = 60
    speed: float = 500
    attacker_diameter: float = 50
    start_distance: float = 1000

    def build(self) -> ModelResult:
        return constant_speed_model(
            screen_distance=self.screen_distance,
            frame_rate=self.frame_rate,
            speed=self.speed,
            attacker_diameter=self.attacker_diameter,
            start_distance=self.start_distance,
        )


@dataclass
class DiameterModelConfig(ModelConfig):
    """Configuration for an expansion between two diameters."""

    type: str = "diameter"
    start_diameter: float = 2
    end_diameter: float = 50
    duration: float = 3
    frame_rate: float = 60
    expansion_mode: Union[ExpansionMode, str] = ExpansionMode.CONSTANT_SPEED

    def build(self) -> ModelResult:
        return diameter_model(
            start_diameter=self.start_diameter,
            end_diameter=self.end_diameter,
            duration=self.duration,
            frame_rate=self.frame_rate,
            expansion_mode=self.expansion_mode,
        )


@dataclass
class AnimationConfig:
    """Rendering settings for a looming animation."""

    correction: Optional[float] = 0.0285
    width: int = 1280
    height: int = 1024
    fill: str = "black"
    background: str = "white"
    dots: bool = False
    dots_interval: int = 20
    dots_colour: str = "grey"
    dots_position: str = "br"
    dots_size: float = 0.005
    frame_number: bool = False
    frame_number_colour: str = "grey"
    frame_number_position: str = "tr"
    frame_number_size: float = 2
    frame_number_rotation: float = 0
    save_data: bool = False
    data_label: str = "model"
    output: str = "animation.mp4"

    @classmethod
    def from_dict(cls, config: Optional[Dict[str, Any]]) -> "AnimationConfig":
        return cls(**_checked_fields(cls, config or {}))


# Register model types with their config classes
MODEL_CONFIG_TYPES = {
    "constant_speed": ConstantSpeedModelConfig,
    "diameter": DiameterModelConfig,
}
