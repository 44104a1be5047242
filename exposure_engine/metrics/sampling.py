from __future__ import annotations

import random
from typing import Callable

# 采样判定：传入采样间隔 N，返回本次是否命中（约 1/N 概率）
Sampler = Callable[[int], bool]


def random_sampler(interval: int) -> bool:
    if interval <= 1:
        return True
    return random.randrange(interval) == 0
