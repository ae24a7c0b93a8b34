"""Run the catalog API with uvicorn.

Usage:
    python -m catalog_api.run_server
"""
import logging

import uvicorn

from catalog_api.core.config import get_settings, validate_runtime_config


def main() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
    validate_runtime_config(settings)
    logging.getLogger(__name__).info('Starting server on http://%s:%s', settings.host, settings.port)
    uvicorn.run('catalog_api.main:app', host=settings.host, port=settings.port, reload=False)


if __name__ == '__main__':
    main()
