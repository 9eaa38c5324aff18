import os

# Draw off-screen
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pytest  # noqa: E402


class FakeWriteGear:
    """Stands in for vidgear's WriteGear and records what it is given."""

    instances = []

    def __init__(self, output, logging=False, **output_params):
        self.output = output
        self.output_params = output_params
        self.frames = []
        self.closed = False
        FakeWriteGear.instances.append(self)

    def write(self, frame):
        self.frames.append(frame.copy())

    def close(self):
        self.closed = True


@pytest.fixture
def fake_writer(monkeypatch):
    from loomgen.render import animation

    FakeWriteGear.instances = []
    monkeypatch.setattr(animation, "WriteGear", FakeWriteGear)
    return FakeWriteGear
