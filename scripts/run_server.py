import os
import sys
import hydra
import uvicorn
from omegaconf import DictConfig, OmegaConf
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from src.common.config.manager import ConfigManager
from src.common.config.models import AnalyticsConfig
from src.common.database import init_db
from src.common.logging import setup_logger
from src.congestion.infrastructure.broadcast.realtime_broadcaster import RealtimeBroadcaster
from src.congestion.presentation.api import app, configure

logger = setup_logger("counter_analytics.server")

@hydra.main(version_base=None, config_path="../conf", config_name="config")
def main(cfg: DictConfig):
    analytics_cfg = OmegaConf.merge(OmegaConf.structured(AnalyticsConfig), cfg.analytics)
    logger.info("Configuration loaded.")

    database_url = os.getenv("DATABASE_URL", analytics_cfg.database.url)
    engine = create_engine(database_url, pool_pre_ping=True, echo=analytics_cfg.database.echo)
    init_db(bind=engine)

    configure(
        sessionmaker(autocommit=False, autoflush=False, bind=engine),
        ConfigManager.service_windows(analytics_cfg),
        RealtimeBroadcaster(queue_size=analytics_cfg.broadcast.queue_size),
    )

    server_cfg = analytics_cfg.server
    logger.info(f"Starting server at http://{server_cfg.host}:{server_cfg.port}")
    uvicorn.run(app, host=server_cfg.host, port=server_cfg.port)

if __name__ == "__main__":
    main()
