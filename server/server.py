import os
from flask import Flask, abort, Response
from bootparams.constants import DEFAULT_OVERRIDES_FILE

app = Flask(__name__)
app.config.setdefault("OVERRIDES_FILE", DEFAULT_OVERRIDES_FILE)


@app.route("/cmdline")
def host_overrides():
    overrides_file = app.config["OVERRIDES_FILE"]
    if not os.path.isfile(overrides_file):
        abort(404)

    with open(overrides_file, "r", encoding="utf-8") as _f:
        return Response(_f.read(), mimetype="application/yaml")
