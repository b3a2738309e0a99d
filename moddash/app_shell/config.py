import logging
from pathlib import Path

from moddash.adapters.sqlite.migrator import SQLiteMigrator
from moddash.adapters.sqlite.repos import SQLiteRoleMappingRepo
from moddash.components.auth import AuthConfigPort, check_config
from moddash.domain.entities import RoleMapping
from moddash.rules.models import DashboardRules

logger = logging.getLogger(__name__)


def validate_ops_env(config: AuthConfigPort) -> list[str]:
    """
    Check the auth environment before startup.

    Problems are logged, not fatal: the login page reports them to the
    moderator instead. Returns the problems found.
    """
    problems: list[str] = []

    error = check_config(config)
    if error:
        problems.append(error)
    if config.mod_password and config.mod_password_hash:
        problems.append("Both MOD_PASSWORD and MOD_PASSWORD_HASH are set; MOD_PASSWORD wins.")
    if config.auth_ttl_seconds <= 0:
        problems.append("AUTH_TTL_SECONDS must be positive.")

    for problem in problems:
        logger.warning(f"Configuration: {problem}")
    if not problems:
        logger.info("Configuration Validated.")
    return problems


def seed_role_mappings(db_path: str, rules: DashboardRules, force: bool = False) -> int:
    """Copy role mappings from the rules file into the store. Returns rows written."""
    repo = SQLiteRoleMappingRepo(db_path)
    if not force and repo.count() > 0:
        return 0
    if not rules.role_mappings:
        return 0
    seeded = repo.replace_all([RoleMapping(**r.model_dump()) for r in rules.role_mappings])
    logger.info(f"Seeded {seeded} role mappings from rules")
    return seeded


def prepare_storage(
    db_path: str, migrations_dir: str, rules: DashboardRules, seed_roles: bool = True
) -> None:
    """Create the data dir, apply migrations and seed role mappings once."""
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    applied = SQLiteMigrator(db_path, migrations_dir).run_migrations()
    if applied:
        logger.info(f"Applied {len(applied)} migration(s)")

    if seed_roles:
        seed_role_mappings(db_path, rules)
