"""
Build a looming model from a YAML configuration and turn it into a video.
"""

import os
from dataclasses import dataclass
from typing import Iterable, Optional

from .config import AnimationConfig, ModelConfig
from .core.results import ModelResult
from .render.animation import LoomingAnimation
from .utils.config_manager import ConfigManager
from .utils.csv_writer import animation_data_filename, export_model
from .utils.log_config import setup_logging

logger = setup_logging(logger_name="Pipeline", level="INFO", color="white")


@dataclass
class PipelineOutput:
    video_path: str
    data_path: Optional[str]
    result: ModelResult


def generate_from_config(
    config_path: str, overrides: Iterable[str] = ()
) -> PipelineOutput:
    """
    Load a configuration, build its model, render the animation and optionally save
    the frame data next to it.

    Args:
        config_path (str): Path to the YAML configuration.
        overrides (Iterable[str]): ``key.subkey=value`` strings applied on top of the
            file, e.g. ``["model.speed=300"]``.

    Returns:
        PipelineOutput: Paths of the written files and the model result.
    """
    config = ConfigManager(config_path)
    config.apply_overrides(overrides)

    model_config = ModelConfig.from_dict(config.get_model_params())
    animation_config = AnimationConfig.from_dict(config.get_animation_params())

    result = model_config.build()
    logger.info(
        f"Built {result.model} model: {result.total_frames} frames at "
        f"{result.frame_rate:g} Hz ({result.duration:.3f} s)"
    )

    video_path = LoomingAnimation(animation_config).render(result)

    data_path = None
    if animation_config.save_data:
        data_path = os.path.join(
            os.path.dirname(video_path),
            animation_data_filename(
                animation_config.data_label,
                result.frame_rate,
                animation_config.width,
                animation_config.height,
            ),
        )
        export_model(result, data_path, correction=animation_config.correction)

    return PipelineOutput(video_path=video_path, data_path=data_path, result=result)
