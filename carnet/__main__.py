# carnet/__main__.py
from __future__ import annotations

import uvicorn

from carnet.common.settings import get_settings
from carnet.database.core.main import create_all


def main() -> None:
    cfg = get_settings()
    create_all()
    uvicorn.run(
        "carnet.services.api.app:app",
        host=cfg.api.host,
        port=cfg.api.port,
        log_level=cfg.log_level.lower(),
    )


if __name__ == "__main__":
    main()
