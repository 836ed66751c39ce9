#
# numfmt - Sentinels Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import pickle

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from numfmt.sentinels import UNSET, UnsetType, ifnotunset


# Local Classes & Methods ----------------------------------------------------------------------------------------------

class TestUnset:
    def test_singleton_identity(self):
        assert UNSET is UnsetType()

    def test_repr(self):
        assert repr(UNSET) == "<UNSET>"

    def test_falsy(self):
        assert not UNSET

    def test_eq_by_identity(self):
        assert UNSET == UNSET
        assert UNSET != None  # noqa: E711
        assert hash(UNSET) == hash(UnsetType())

    def test_pickle(self):
        assert pickle.loads(pickle.dumps(UNSET)) is UNSET


class TestIfNotUnset:
    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param(UNSET, "default", id="unset"),
            pytest.param(None, None, id="none_kept"),
            pytest.param(0, 0, id="falsy_kept"),
            pytest.param("x", "x", id="value"),
        ],
    )
    def test_ifnotunset(self, value, expected):
        assert ifnotunset(value, default="default") == expected
