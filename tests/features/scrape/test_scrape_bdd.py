"""BDD tests for the end-to-end scrape."""

import pytest
from pytest_bdd import scenarios

scenarios("scrape.feature")

pytestmark = [pytest.mark.asgi]
