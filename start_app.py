#!/usr/bin/env python
"""Serve the shopkeep API with uvicorn; PORT and LOG_LEVEL come from the environment."""
import os

import uvicorn

from shopkeep.core.config import get_settings

if __name__ == "__main__":
    settings = get_settings()
    port = int(os.environ.get("PORT", 8000))

    print(f"Starting shopkeep ({settings.ENVIRONMENT}) on port {port}")

    uvicorn.run(
        "shopkeep.main:app",
        host="0.0.0.0",
        port=port,
        log_level=settings.LOG_LEVEL.lower(),
        reload=settings.ENVIRONMENT == "development",
    )
