"""Example of the Logger facade writing MozLog JSON to stdout.

Run with:
    python examples/basic_logging.py
    MOZLOG_GCP=true python examples/basic_logging.py

Output:
    One MozLog JSON object per line. With MOZLOG_GCP=true the lines carry
    Google Cloud Logging's ``severity`` instead of ``Severity``.
"""

import socket
import sys

from mozlog_json import FnValue, Logger, MozLogJson, Nested

# Create the drain
drain = (
    MozLogJson.new(sys.stdout)
    .logger_name("example")
    .msg_type("app.log")
    .hostname(socket.gethostname())
    .add_key_value(EnvVersion="2.0")
    .set_nested_values(True)
    .build()
)

root = Logger.root(drain, version="1.0.0")


def main() -> None:
    """Log a few records through a logger hierarchy."""
    root.info("starting", port=8080)

    request_log = root.new(request_id="abc123", level=FnValue(lambda r: r.level.name))
    request_log.debug("user %s authenticated", "alice")
    request_log.warning(
        "slow query", elapsed_ms=812.5, query=Nested({"table": "users"})
    )
    request_log.error("upstream failed", status=503, retry=False)


if __name__ == "__main__":
    main()
