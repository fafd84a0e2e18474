"""Application configuration and settings management."""

from pathlib import Path
from typing import Any, Literal, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="TRIPMATCH_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "TripMatch Driver Routing API"
    api_prefix: str = "/api"
    data_root: Path = Field(default=Path("data"), description="Root directory for route snapshots.")
    storage_backend: Literal["auto", "supabase", "memory"] = Field(
        default="auto",
        description="Trip/driver store backend. 'auto' uses Supabase when credentials are present.",
    )

    # Route optimization defaults
    fuel_cost_per_km: float = Field(default=0.8, ge=0.0, description="Fuel cost per km in local currency.")
    max_stops_per_route: int = Field(default=8, ge=1)
    max_total_duration_minutes: int = Field(default=480, ge=1)
    prioritize_asap: bool = True
    min_orders_per_route: int = Field(default=2, ge=1)

    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:8081",
            "http://127.0.0.1:8081",
            "http://localhost:19006",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    # Supabase configuration
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co).",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key for backend operations.",
    )
    trip_table: str = "trip_requests"
    driver_table: str = "driver_profiles"
    truck_type_table: str = "truck_types"

    @field_validator("data_root", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            # Try JSON first
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()

    @property
    def supabase_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)


settings = Settings()
