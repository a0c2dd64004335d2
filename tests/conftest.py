import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pytest

from mandelexplorer.util.logging_setup import configure_root_logging


@pytest.fixture(autouse=True)
def _isolate_figures_and_logging():
    yield
    plt.close("all")
    configure_root_logging(console=False, log_file=None)
