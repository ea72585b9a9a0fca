from ecr_bridge.domain.services.artifact_naming import generate_artifact_name
from ecr_bridge.domain.services.command_renderer import (
    RenderedCommand,
    RenderOptions,
    render_command,
)
from ecr_bridge.domain.services.error_decoder import decode_error, extract_error_message

__all__ = [
    "RenderedCommand",
    "RenderOptions",
    "decode_error",
    "extract_error_message",
    "generate_artifact_name",
    "render_command",
]
