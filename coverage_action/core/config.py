import os

from pydantic import BaseModel


class Settings(BaseModel):
    # Action inputs (GitHub exposes `with:` values as INPUT_* env vars)
    TEST_SCRIPT: str = os.getenv("INPUT_TEST_SCRIPT", "npx jest")
    PACKAGE_MANAGER: str = os.getenv("INPUT_PACKAGE_MANAGER", "npm")
    WORKING_DIRECTORY: str | None = os.getenv("INPUT_WORKING_DIRECTORY") or None
    SKIP_STEP: str = os.getenv("INPUT_SKIP_STEP", "none")
    COVERAGE_FILE: str | None = os.getenv("INPUT_COVERAGE_FILE") or None

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()
