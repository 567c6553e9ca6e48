"""Early-boot side effects: PROJ config, dotenv, logging.

This module is imported before any other nclimgrid_api modules so that the
environment and logging are configured before settings are read.
"""

import logging
import os
from importlib.util import find_spec
from pathlib import Path


# -- PROJ data configuration --------------------------------------------------
def _configure_proj_data() -> None:
    """Point PROJ to rasterio bundled data to avoid mixed-install conflicts."""
    spec = find_spec("rasterio")
    if spec is None or spec.origin is None:
        return

    proj_data = Path(spec.origin).parent / "proj_data"
    if not proj_data.is_dir():
        return

    proj_data_path = str(proj_data)
    os.environ["PROJ_DATA"] = proj_data_path
    os.environ["PROJ_LIB"] = proj_data_path


_configure_proj_data()

# -- Load .env ----------------------------------------------------------------
from dotenv import load_dotenv  # noqa: E402

load_dotenv()

# -- nclimgrid_api / third-party logging setup --------------------------------
app_logger = logging.getLogger("nclimgrid_api")
app_logger.setLevel(logging.INFO)
if not app_logger.handlers:
    handler = logging.StreamHandler()
    handler.setLevel(logging.INFO)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s - %(message)s"))
    app_logger.addHandler(handler)
app_logger.propagate = False

logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("rasterio").setLevel(logging.WARNING)
