import logging
import os

from points24 import create_app
from points24.config import DevelopmentConfig

logging.basicConfig(
    level=logging.INFO,   # <-- allow INFO and above
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)

app = create_app(DevelopmentConfig if os.environ.get("FLASK_DEBUG") else None)

if __name__ == "__main__":
    app.run(host="0.0.0.0", port=int(os.environ.get("PORT", 5173)), debug=bool(os.environ.get("FLASK_DEBUG")))
