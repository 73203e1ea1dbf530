from pydantic import BaseModel, ConfigDict, Field


class CollectRules(BaseModel):
    max_path_len: int = Field(default=2048, ge=1)
    max_referrer_len: int = Field(default=2048, ge=1)
    max_screen_size_len: int = Field(default=32, ge=1)
    max_user_agent_len: int = Field(default=512, ge=1)
    max_duration_sec: int = Field(default=86400, ge=0)

class RetentionRules(BaseModel):
    retention_days: int = Field(default=365, ge=1)
    sweep_interval_seconds: float = Field(default=86400.0, gt=0)

class AuthRules(BaseModel):
    window_seconds: int = Field(default=300, ge=1)
    max_attempts: int = Field(default=5, ge=1)

class Rules(BaseModel):
    model_config = ConfigDict(extra="forbid")

    collect: CollectRules = Field(default_factory=CollectRules)
    retention: RetentionRules = Field(default_factory=RetentionRules)
    auth: AuthRules = Field(default_factory=AuthRules)
