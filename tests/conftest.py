import pytest

from frame_monitor.monitor.models import StatsData
from frame_monitor.monitor.samplers import MB


@pytest.fixture
def healthy_stats():
    return StatsData(
        fps=60.0,
        frame_time=16.5,
        wasm_memory_usage=int(20 * MB),
        gpu_memory_usage=int(64 * MB),
        draw_calls=("background", "sprites", "text"),
        buffer_count=12,
        data_upload_count=4,
        data_upload_size=int(0.25 * MB),
        sprite_system_count=8,
        sprite_count=1_200,
        symbol_count=30,
        shader_count=14,
        shader_compile_count=0,
    )
