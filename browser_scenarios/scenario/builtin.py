"""Scenarios shipped with the tool, run when no scenario files are given."""

from .schema import Scenario, Step

SEARCH_BOX = 'input[name="q"]'

GOOGLE_HOMEPAGE_TITLE = Scenario(
    name="Verify Google homepage title",
    steps=(
        Step.navigate("https://www.google.com"),
        Step.assert_title("Google"),
    ),
)

BING_SEARCH = Scenario(
    name="Search in Bing and check results",
    steps=(
        Step.navigate("https://www.bing.com"),
        Step.fill(SEARCH_BOX, "Playwright testing"),
        Step.press(SEARCH_BOX, "Enter"),
        Step.assert_title("Playwright"),
    ),
)

BUILTIN_SCENARIOS = [GOOGLE_HOMEPAGE_TITLE, BING_SEARCH]
