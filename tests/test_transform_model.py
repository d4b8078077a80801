import pytest

from bmpstudio.models.transform_model import (
    Clarendon,
    Darken,
    Enlarge,
    Grayscale,
    Lighten,
    Rotate,
    TransformKind,
    Vignette,
    build_transform,
)


def test_build_transform_carries_parameters():
    assert build_transform(TransformKind.CLARENDON, factor=0.3) == Clarendon(0.3)
    assert build_transform(TransformKind.LIGHTEN, factor=0.2) == Lighten(0.2)
    assert build_transform(TransformKind.DARKEN, factor=0.9) == Darken(0.9)
    assert build_transform(TransformKind.ROTATE, turns=-3) == Rotate(-3)
    assert build_transform(TransformKind.ENLARGE, x_scale=4, y_scale=1) == Enlarge(4, 1)


def test_build_transform_ignores_unused_parameters():
    assert build_transform(TransformKind.GRAYSCALE, factor=0.1, turns=7) == Grayscale()
    assert build_transform(TransformKind.VIGNETTE) == Vignette()


@pytest.mark.parametrize("kind", list(TransformKind))
def test_every_kind_builds_matching_variant(kind):
    assert build_transform(kind).kind is kind
    assert kind.label


def test_menu_numbers():
    assert [kind.value for kind in TransformKind] == list(range(1, 11))
