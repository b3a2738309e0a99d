from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from moddash.components.actions import ActionOutput
from moddash.components.importer import ImportOutput
from moddash.components.status import StatusSummary
from moddash.domain.entities import Member, MemberStatus, RoleMapping, timestamp_to_iso


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Members ---
class MemberResponse(CamelModel):
    username: str
    tier: int
    start: str
    end: str
    is_moderator: bool
    status: MemberStatus | None = None

    @classmethod
    def from_member(cls, member: Member, status: MemberStatus | None = None) -> "MemberResponse":
        return cls(
            username=member.username,
            tier=member.tier,
            start=timestamp_to_iso(member.start),
            end=timestamp_to_iso(member.end),
            is_moderator=member.is_moderator,
            status=status,
        )


# --- Stats ---
class StatsResponse(CamelModel):
    active: int
    expiring: int
    lapsed: int
    expiring_soon: list[MemberResponse]
    moderators: list[MemberResponse]

    @classmethod
    def from_summary(cls, summary: StatusSummary) -> "StatsResponse":
        return cls(
            active=summary.active,
            expiring=summary.expiring,
            lapsed=summary.lapsed,
            expiring_soon=[MemberResponse.from_member(m) for m in summary.expiring_soon],
            moderators=[MemberResponse.from_member(m) for m in summary.moderators],
        )


# --- Role mappings ---
class RoleMappingResponse(CamelModel):
    plan: str
    tier: int
    discord_role: str

    @classmethod
    def from_mapping(cls, mapping: RoleMapping) -> "RoleMappingResponse":
        return cls(plan=mapping.plan, tier=mapping.tier, discord_role=mapping.discord_role)


# --- Import ---
class ImportResponse(CamelModel):
    success: bool
    count: int
    error: str | None = None
    error_code: str | None = None
    warnings: list[str] = []
    members: list[MemberResponse] = []

    @classmethod
    def from_output(cls, output: ImportOutput, include_members: bool = False) -> "ImportResponse":
        return cls(
            success=output.success,
            count=output.count,
            error=output.error,
            error_code=output.error_code,
            warnings=list(output.warnings),
            members=[MemberResponse.from_member(m) for m in output.members]
            if include_members
            else [],
        )


# --- Actions ---
class ActionResponse(CamelModel):
    action: str
    implemented: bool
    success: bool
    message: str
    summary: StatsResponse | None = None

    @classmethod
    def from_output(cls, output: ActionOutput) -> "ActionResponse":
        return cls(
            action=output.action.value,
            implemented=output.implemented,
            success=output.success,
            message=output.message,
            summary=StatsResponse.from_summary(output.summary) if output.summary else None,
        )


# --- Session ---
class SessionResponse(CamelModel):
    role: str
    issued_at: datetime
    expires_at: datetime
