"""
Tests for painting challenges onto an image
"""
import io
import random

from PIL import Image

from utils.captcha_helper import Challenge
from utils.captcha_render import (CAPTCHA_HEIGHT, CAPTCHA_WIDTH, BACKGROUND, challenge_png,
                                  new_surface, render_challenge)


class RecordingRandom(random.Random):
    """Random that remembers every uniform() draw."""

    def __init__(self, seed):
        super().__init__(seed)
        self.uniform_draws = []

    def uniform(self, a, b):
        value = super().uniform(a, b)
        self.uniform_draws.append((a, b, value))
        return value


class TestRenderChallenge:

    def test_png_has_fixed_size(self):
        data = challenge_png(Challenge(4, 6, 'add', 10))
        image = Image.open(io.BytesIO(data))
        assert image.format == 'PNG'
        assert image.size == (CAPTCHA_WIDTH, CAPTCHA_HEIGHT)

    def test_prompt_ink_is_drawn(self):
        surface = new_surface()
        render_challenge(surface, Challenge(3, 7, 'multiply', 21), rng=random.Random(5))
        colors = surface.getcolors(maxcolors=CAPTCHA_WIDTH * CAPTCHA_HEIGHT)
        darkest = min(sum(color) for _, color in colors)
        assert darkest < sum(BACKGROUND) // 2

    def test_noise_alpha_ranges(self):
        rng = RecordingRandom(7)
        render_challenge(new_surface(), Challenge(1, 2, 'add', 3), rng=rng)
        line_draws = [v for a, b, v in rng.uniform_draws if (a, b) == (0.15, 0.35)]
        dot_draws = [v for a, b, v in rng.uniform_draws if (a, b) == (0.1, 0.3)]
        assert len(line_draws) == 3
        assert len(dot_draws) == 40
        assert all(0.15 <= v <= 0.35 for v in line_draws)
        assert all(0.1 <= v <= 0.3 for v in dot_draws)

    def test_rendering_twice_repaints_the_whole_surface(self):
        surface = new_surface()
        challenge = Challenge(8, 8, 'multiply', 64)
        render_challenge(surface, challenge, rng=random.Random(1))
        render_challenge(surface, challenge, rng=random.Random(1))
        fresh = new_surface()
        render_challenge(fresh, challenge, rng=random.Random(1))
        assert surface.tobytes() == fresh.tobytes()

    def test_corner_pixel_is_background_without_noise(self):
        class NoNoise(random.Random):
            def randint(self, a, b):
                return b  # every line and dot lands in the bottom-right corner

        surface = new_surface()
        render_challenge(surface, Challenge(1, 1, 'add', 2), rng=NoNoise())
        assert surface.getpixel((0, 0)) == BACKGROUND
