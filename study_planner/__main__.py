"""Run the API server with ``python -m study_planner``."""
import uvicorn

from study_planner.core.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "study_planner.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
