import os
import sys
import logging
import hydra
import uvicorn
from omegaconf import DictConfig

# Add src to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from src.common.config import ConfigManager
from src.common.logging import setup_logger
from src.corridor.application.builder import PollerApplicationBuilder
from src.corridor.presentation.api import app
from src.corridor.presentation.api.routes import traffic

@hydra.main(version_base=None, config_path="../conf", config_name="config")
def main(cfg: DictConfig):
    # Parent logger for every module under src.*
    logger = setup_logger("src", level=logging.INFO)
    cfg = ConfigManager.merge(cfg)
    logger.info(f"Configuration loaded: {len(cfg.traffic.corridors)} corridors")

    builder = PollerApplicationBuilder(cfg)
    scheduler = builder.build_scheduler()
    components = builder.get_components()
    traffic.init_traffic_routes(components['repository'], components['metrics_collector'])

    @app.on_event("startup")
    async def startup_event():
        logger.info(f"Starting poller (every {cfg.traffic.poll_seconds}s)")
        scheduler.start()

    @app.on_event("shutdown")
    async def shutdown_event():
        await scheduler.stop()
        await components['client'].aclose()

    logger.info(f"Starting server at http://{cfg.server.host}:{cfg.server.port}")
    uvicorn.run(app, host=cfg.server.host, port=cfg.server.port)

if __name__ == "__main__":
    main()
