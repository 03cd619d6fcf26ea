"""Predefined samplers for the engine statistics."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from .sampler import DEFAULT_SAMPLER, Sampler

MB = float(1024 * 1024)


FPS = DEFAULT_SAMPLER.replace(
    label="Frames per second",
    extract=lambda s: s.fps,
    warn_threshold=55.0,
    err_threshold=25.0,
    precision=2,
    max_display=60.0,
)

FRAME_TIME = DEFAULT_SAMPLER.replace(
    label="Frame time (ms)",
    extract=lambda s: s.frame_time,
    warn_threshold=1000.0 / 55.0,
    err_threshold=1000.0 / 25.0,
    precision=2,
)

WASM_MEMORY_USAGE = DEFAULT_SAMPLER.replace(
    label="WASM memory usage (Mb)",
    extract=lambda s: s.wasm_memory_usage,
    warn_threshold=50.0,
    err_threshold=100.0,
    precision=2,
    scale_divisor=MB,
)

GPU_MEMORY_USAGE = DEFAULT_SAMPLER.replace(
    label="GPU memory usage (Mb)",
    extract=lambda s: s.gpu_memory_usage,
    warn_threshold=100.0,
    err_threshold=500.0,
    precision=2,
    scale_divisor=MB,
)

DRAW_CALL_COUNT = DEFAULT_SAMPLER.replace(
    label="Draw call count",
    extract=lambda s: len(s.draw_calls),
    detail_extractor=lambda s: s.draw_calls,
    warn_threshold=100.0,
    err_threshold=500.0,
)

BUFFER_COUNT = DEFAULT_SAMPLER.replace(
    label="Buffer count",
    extract=lambda s: s.buffer_count,
    warn_threshold=100.0,
    err_threshold=500.0,
)

DATA_UPLOAD_COUNT = DEFAULT_SAMPLER.replace(
    label="Data upload count",
    extract=lambda s: s.data_upload_count,
    warn_threshold=100.0,
    err_threshold=500.0,
)

DATA_UPLOAD_SIZE = DEFAULT_SAMPLER.replace(
    label="Data upload size (Mb)",
    extract=lambda s: s.data_upload_size,
    warn_threshold=1.0,
    err_threshold=10.0,
    precision=2,
    scale_divisor=MB,
)

SPRITE_SYSTEM_COUNT = DEFAULT_SAMPLER.replace(
    label="Sprite system count",
    extract=lambda s: s.sprite_system_count,
    warn_threshold=100.0,
    err_threshold=500.0,
)

SYMBOL_COUNT = DEFAULT_SAMPLER.replace(
    label="Symbol count",
    extract=lambda s: s.symbol_count,
    warn_threshold=100.0,
    err_threshold=500.0,
)

SPRITE_COUNT = DEFAULT_SAMPLER.replace(
    label="Sprite count",
    extract=lambda s: s.sprite_count,
    warn_threshold=100_000.0,
    err_threshold=500_000.0,
)

SHADER_COUNT = DEFAULT_SAMPLER.replace(
    label="Shader count",
    extract=lambda s: s.shader_count,
    warn_threshold=100.0,
    err_threshold=500.0,
)

SHADER_COMPILE_COUNT = DEFAULT_SAMPLER.replace(
    label="Shader compile count",
    extract=lambda s: s.shader_compile_count,
    warn_threshold=10.0,
    err_threshold=100.0,
)


PREDEFINED_SAMPLERS: Mapping[str, Sampler] = MappingProxyType(
    {
        "fps": FPS,
        "frame_time": FRAME_TIME,
        "wasm_memory_usage": WASM_MEMORY_USAGE,
        "gpu_memory_usage": GPU_MEMORY_USAGE,
        "draw_call_count": DRAW_CALL_COUNT,
        "buffer_count": BUFFER_COUNT,
        "data_upload_count": DATA_UPLOAD_COUNT,
        "data_upload_size": DATA_UPLOAD_SIZE,
        "sprite_system_count": SPRITE_SYSTEM_COUNT,
        "symbol_count": SYMBOL_COUNT,
        "sprite_count": SPRITE_COUNT,
        "shader_count": SHADER_COUNT,
        "shader_compile_count": SHADER_COMPILE_COUNT,
    }
)


__all__ = [
    "BUFFER_COUNT",
    "DATA_UPLOAD_COUNT",
    "DATA_UPLOAD_SIZE",
    "DRAW_CALL_COUNT",
    "FPS",
    "FRAME_TIME",
    "GPU_MEMORY_USAGE",
    "MB",
    "PREDEFINED_SAMPLERS",
    "SHADER_COMPILE_COUNT",
    "SHADER_COUNT",
    "SPRITE_COUNT",
    "SPRITE_SYSTEM_COUNT",
    "SYMBOL_COUNT",
    "WASM_MEMORY_USAGE",
]
