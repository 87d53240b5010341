from contextlib import asynccontextmanager
import logging

from app.assessment.archetypes import load_archetypes
from app.assessment.job_fit import load_job_fit_rules

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    archetypes = load_archetypes()
    rules = load_job_fit_rules()
    logger.info(
        "rule_tables_loaded archetypes=%s job_fit_groups=%s",
        len(archetypes),
        len(rules.groups),
    )
    yield
