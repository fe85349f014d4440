"""
Paint a math challenge onto a Pillow image with light visual noise.
The prompt is never exposed as text in the page; only this image is.
"""
import io
import random

from PIL import Image, ImageDraw, ImageFont

CAPTCHA_WIDTH = 160
CAPTCHA_HEIGHT = 50
BACKGROUND = (241, 243, 245)
INK = (33, 37, 41)
FONT_SIZE = 22

NOISE_LINES = 3
NOISE_DOTS = 40
LINE_ALPHA = (0.15, 0.35)
DOT_ALPHA = (0.1, 0.3)

_BOLD_FONTS = ('DejaVuSans-Bold.ttf', 'Arial Bold.ttf', 'arialbd.ttf')


def _load_font(size=FONT_SIZE):
    for name in _BOLD_FONTS:
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue
    return ImageFont.load_default(size=size)


def _alpha(rng, bounds):
    return int(round(rng.uniform(*bounds) * 255))


def new_surface():
    """Blank fixed-size surface for one challenge."""
    return Image.new('RGB', (CAPTCHA_WIDTH, CAPTCHA_HEIGHT), BACKGROUND)


def render_challenge(surface, challenge, rng=None):
    """
    Paint `challenge` onto `surface`: flat background, distractor lines,
    dot speckle, then the prompt centered on the mid-line.
    """
    rng = rng or random
    width, height = surface.size
    draw = ImageDraw.Draw(surface, 'RGBA')

    draw.rectangle([0, 0, width, height], fill=BACKGROUND)

    for _ in range(NOISE_LINES):
        start = (rng.randint(0, width), rng.randint(0, height))
        end = (rng.randint(0, width), rng.randint(0, height))
        draw.line([start, end], fill=INK + (_alpha(rng, LINE_ALPHA),), width=1)

    for _ in range(NOISE_DOTS):
        x = rng.randint(0, width)
        y = rng.randint(0, height)
        draw.ellipse([x - 1, y - 1, x + 1, y + 1], fill=INK + (_alpha(rng, DOT_ALPHA),))

    font = _load_font()
    text = challenge.prompt
    left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
    x = (width - (right - left)) / 2 - left
    y = (height - (bottom - top)) / 2 - top
    draw.text((x, y), text, font=font, fill=INK + (255,))


def challenge_png(challenge, rng=None) -> bytes:
    """Render `challenge` onto a new surface and return PNG bytes."""
    surface = new_surface()
    render_challenge(surface, challenge, rng=rng)
    buffered = io.BytesIO()
    surface.save(buffered, format='PNG')
    return buffered.getvalue()
