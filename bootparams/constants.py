PROC_CMDLINE = "/proc/cmdline"
DEFAULT_PORT = 5000
DEFAULT_OVERRIDES_PATH = "/cmdline"
DEFAULT_OVERRIDES_FILE = "cmdline.yaml"
OVERRIDES_TIMEOUT = 10
OVERRIDE_APPEND_KEY = "append"
OVERRIDE_OVERWRITE_KEY = "overwrite"
