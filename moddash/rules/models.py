from typing import Literal

from pydantic import BaseModel, Field


class StatusRules(BaseModel):
    expiring_window_days: int = Field(default=14, ge=0)
    grace_window_days: int = Field(default=3, ge=0)
    shortlist_cap: int = Field(default=10, ge=1)

class AuthRules(BaseModel):
    cookie_name: str = "mod_auth"
    same_site: Literal["lax", "strict", "none"] = "lax"
    protected_prefixes: list[str] = Field(default_factory=lambda: ["/mod", "/api/mod"])
    public_paths: list[str] = Field(
        default_factory=lambda: ["/mod/login", "/mod/logout", "/favicon.ico"]
    )
    login_path: str = "/mod/login"

class RateLimitWindow(BaseModel):
    window_seconds: int
    max_attempts: int

class RateLimitRules(BaseModel):
    login: RateLimitWindow = RateLimitWindow(window_seconds=60, max_attempts=10)

class ImportRules(BaseModel):
    max_upload_bytes: int = 2 * 1024 * 1024
    allowed_extensions: list[str] = Field(
        default_factory=lambda: [".csv", ".xlsx", ".xlsm"]
    )

class DemoRules(BaseModel):
    enabled: bool = True

class RoleMappingRule(BaseModel):
    plan: str
    tier: int = Field(ge=1)
    discord_role: str

class DashboardRules(BaseModel):
    status: StatusRules = StatusRules()
    auth: AuthRules = AuthRules()
    rate_limits: RateLimitRules = RateLimitRules()
    imports: ImportRules = ImportRules()
    demo: DemoRules = DemoRules()
    role_mappings: list[RoleMappingRule] = Field(default_factory=list)
