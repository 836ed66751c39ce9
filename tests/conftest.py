#
# Pytest Fixtures
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from numfmt.conf import configure


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def default_options():
    """Run every test with default module options and restore them afterwards."""
    configure(preset="default")
    yield
    configure(preset="default")
