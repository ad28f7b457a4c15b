import pickle

import pytest

from lanetruth.exceptions import EmptyGeometry, MalformedShape, NotFound, OutOfRange


@pytest.mark.parametrize(
    "error",
    [
        EmptyGeometry("center line"),
        OutOfRange(12.0, 0.0, 10.0),
        NotFound(5),
        MalformedShape(3, "negative width"),
    ],
)
def test_exceptions_pickle(error):
    restored = pickle.loads(pickle.dumps(error))
    assert type(restored) is type(error)
    assert str(restored) == str(error)


def test_not_found_is_key_error():
    with pytest.raises(KeyError):
        raise NotFound(5)
    assert str(NotFound(5)) == "No lane with id 5 in snapshot"
