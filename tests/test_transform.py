from pdfreflow.docs.model import IDENTITY, Concat, Restore, Save, TransformMatrix
from pdfreflow.layout.transform import TransformTracker, compose

M1 = TransformMatrix(2.0, 0.5, -0.25, 3.0, 10.0, 20.0)
M2 = TransformMatrix(100.0, 0.0, 0.0, 50.0, 7.0, -3.0)


def test_compose_identity_both_sides():
    assert compose(IDENTITY, M1) == M1
    assert compose(M1, IDENTITY) == M1


def test_compose_scale_then_translate():
    # translate by (10, 20), then scale an image unit square to 100x50
    base = TransformMatrix(1, 0, 0, 1, 10, 20)
    out = compose(base, TransformMatrix(100, 0, 0, 50, 0, 0))
    assert out == TransformMatrix(100, 0, 0, 50, 10, 20)
    # the other way round scales the translation as well
    out = compose(TransformMatrix(2, 0, 0, 2, 0, 0), base)
    assert (out.e, out.f) == (20, 40)


def test_save_restore_round_trip():
    tracker = TransformTracker()
    tracker.apply(Concat(M1))
    tracker.apply(Save())
    tracker.apply(Concat(M2))
    assert tracker.current != M1
    tracker.apply(Restore())
    assert tracker.current == M1
    assert tracker.depth == 0


def test_restore_on_empty_stack_is_noop():
    tracker = TransformTracker()
    tracker.apply(Concat(M1))
    assert tracker.apply(Restore()) == M1
    assert tracker.depth == 0


def test_nested_saves_restore_in_order():
    tracker = TransformTracker()
    tracker.save()
    tracker.concat(M1)
    tracker.save()
    tracker.concat(M2)
    tracker.restore()
    assert tracker.current == M1
    tracker.restore()
    assert tracker.current == IDENTITY


def test_matrix_width_and_height_are_column_norms():
    m = TransformMatrix(3.0, 4.0, 0.0, 2.0, 0.0, 0.0)
    assert m.width == 5.0
    assert m.height == 2.0
