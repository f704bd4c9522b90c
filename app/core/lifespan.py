from contextlib import asynccontextmanager
import logging

from app.core.config.scoring import get_scoring_config, scoring_version
from app.taxonomy import get_default_taxonomy_provider

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    get_scoring_config()
    taxonomy = get_default_taxonomy_provider()
    logger.info(
        "scoring_engine_ready version=%s vocabulary_terms=%s",
        scoring_version(),
        len(taxonomy.skill_vocabulary()),
    )
    yield
