"""Diary API server entry point: ``python -m reflectdiary.wsgi``.

The desktop shell waits for the ``Server started`` line on stdout.
"""

from __future__ import annotations

import logging
import sys

from flask_migrate import upgrade
from werkzeug.serving import make_server

from reflectdiary import create_app
from reflectdiary.bootstrap import initialize_app

logger = logging.getLogger("reflectdiary.server")


def main() -> None:
    logging.basicConfig(
        stream=sys.stdout,
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = create_app()
    with app.app_context():
        if app.config.get("DIARY_AUTO_MIGRATE"):
            upgrade()
        initialize_app()

    host = app.config["DIARY_HOST"]
    port = app.config["DIARY_PORT"]
    server = make_server(host, port, app, threaded=True)
    logger.info("Server started on port %s", port)
    sys.stdout.flush()
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Server stopped")


if __name__ == "__main__":
    main()
