"""
Conftest: shared fixtures for all LayerLab test modules.

1. Deterministic RGBA rasters (gradient, random, solid colors)
2. Repo root on sys.path so tests import the flat modules directly
"""

import os
import sys

import numpy as np
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def _make_test_frame(width=64, height=48, alpha=255):
    """Generate a synthetic RGBA test frame (gradient, not blank)."""
    frame = np.zeros((height, width, 4), dtype=np.uint8)
    frame[:, :, 0] = np.linspace(0, 255, width, dtype=np.uint8)  # R gradient
    frame[:, :, 1] = np.linspace(0, 255, height, dtype=np.uint8)[:, None]  # G gradient
    frame[:, :, 2] = np.linspace(255, 0, width, dtype=np.uint8)  # B inverse
    frame[:, :, 3] = alpha
    return frame


def _solid(rgba, width=8, height=8):
    """Solid-color RGBA frame."""
    frame = np.zeros((height, width, 4), dtype=np.uint8)
    frame[:, :] = rgba
    return frame


@pytest.fixture
def frame():
    """A 64x48 gradient RGBA frame, fully opaque."""
    return _make_test_frame()


@pytest.fixture
def noisy_frame():
    """A 32x32 deterministic random RGBA frame with varied alpha."""
    rng = np.random.RandomState(42)
    return rng.randint(0, 256, (32, 32, 4), dtype=np.uint8)


@pytest.fixture
def red_frame():
    """Pure opaque red (255, 0, 0, 255)."""
    return _solid((255, 0, 0, 255))


@pytest.fixture
def gray_frame():
    """Mid-gray (128, 128, 128, 255)."""
    return _solid((128, 128, 128, 255))
