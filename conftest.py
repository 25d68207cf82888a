import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--run-live", action="store_true", default=False, help="run tests that hit youtube.com"
    )


def pytest_configure(config):
    config.addinivalue_line("markers", "live: test talks to the real youtube.com")


def pytest_collection_modifyitems(config, items):
    if not config.getoption("--run-live"):
        skip_live = pytest.mark.skip(reason="need --run-live option to run")
        for item in items:
            if "live" in item.keywords:
                item.add_marker(skip_live)
