"""Prints the kernel command line with the boot server overrides applied"""
import sys
import requests
from bootparams.constants import DEFAULT_PORT, DEFAULT_OVERRIDES_PATH, OVERRIDES_TIMEOUT
from bootparams.kernel import Cmdline
from bootparams.overrides import apply_overrides
from bootparams.procfs import proc_cmdline, CmdlineReadError
from bootparams.pretty import setup


def fetch_overrides(host: str, port: int, path: str = DEFAULT_OVERRIDES_PATH) -> str:
    """downloads the override document from the boot server"""
    req = requests.get(f"http://{host}:{port}{path}", timeout=OVERRIDES_TIMEOUT)
    req.raise_for_status()
    return req.text


def build_cmdline(cmdline: Cmdline, logger) -> Cmdline:
    """returns a copy of cmdline with the boot server overrides merged in"""
    result = Cmdline(str(cmdline))
    host = cmdline.first("host")
    if not host:
        logger.info("No boot server given, using kernel command line as is")
        return result

    try:
        port = int(cmdline.first("port") or DEFAULT_PORT)
    except ValueError:
        logger.warning(f"Invalid boot server port '{cmdline.first('port')}', skipping overrides")
        return result

    path = cmdline.first("cmdline_overrides") or DEFAULT_OVERRIDES_PATH
    logger.info(f"Fetching kernel parameter overrides from {host}:{port}{path}...")

    try:
        document = fetch_overrides(host, port, path)
    except requests.RequestException as ex:
        logger.warning(f"Could not fetch overrides: {ex}")
        return result

    return apply_overrides(result, document)


def main():
    """Start method"""
    print, _console, logger = setup()

    try:
        cmdline = proc_cmdline()
    except CmdlineReadError as ex:
        logger.error(f"Startup failed: {ex}")
        return 1

    try:
        result = build_cmdline(cmdline, logger)
    except ValueError as ex:
        logger.error(f"Invalid override document: {ex}")
        return 1

    print(str(result), markup=False, highlight=False)
    return 0


if __name__ == "__main__":
    sys.exit(main())
