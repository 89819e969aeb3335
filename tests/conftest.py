"""
pytest configuration for the bootparams test suite
"""

import pytest

from bootparams.kernel import Cmdline
from bootparams.procfs import reset_proc_cmdline


SAMPLE = "quiet console=ttyS0 console=ttyS1 root=/dev/sda1"


@pytest.fixture
def cmdline():
    """A command line with a flag, a repeated key and a plain key"""
    return Cmdline(SAMPLE)


@pytest.fixture(autouse=True)
def reset_shared_cmdline():
    """Forget the shared /proc/cmdline instance between tests"""
    reset_proc_cmdline()
    yield
    reset_proc_cmdline()
