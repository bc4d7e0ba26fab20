import os
import shutil
import tempfile

# Point every data and log path at a throwaway folder before anything imports tt, and keep Qt off the real display.
_TEST_HOME = tempfile.mkdtemp(prefix="tasktimer-tests-")
os.environ["TASKTIMER_HOME"] = _TEST_HOME
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


def pytest_unconfigure(config):
    shutil.rmtree(_TEST_HOME, ignore_errors=True)
