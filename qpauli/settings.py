# qpauli/settings.py
from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Runtime settings for qpauli.
    """

    # --- Backend ---
    BACKEND: str = "stim"  # "stim" | "qiskit" | "statevector"

    # --- Measurement ---
    # What happens to the scratch qubit after a parity measurement: "reset" | "as_is"
    ANCILLA_RELEASE_POLICY: str = "reset"

    # --- Runtime ---
    LOG_LEVEL: str = "INFO"
    SEED: int | None = None

    model_config = SettingsConfigDict(
        env_prefix="QPAULI_",
        env_file=".env",
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
