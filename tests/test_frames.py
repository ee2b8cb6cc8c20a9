from src.core.frames import FrameGate


def test_each_id_passes_once():
    gate = FrameGate()
    seen = [frame_id for frame_id in [1, 1, 1, 2, 2, 3] if gate.accept(frame_id)]
    assert seen == [1, 2, 3]
    assert gate.last_id == 3


def test_initial_id_is_not_a_frame():
    gate = FrameGate()
    assert not gate.accept(0)
    assert gate.accept(1)
