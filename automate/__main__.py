"""Run the AutoMate server: python -m automate"""

import uvicorn

from automate.adapters.web.server import app
from automate.config import CONFIG

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=CONFIG["port"], log_level="info")
