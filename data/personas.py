"""Registered user personas and the behaviour each one is expected to show.

Persona-dependent behaviour is expressed as a set of quirks so callers (and
the comparative verifier) never branch on a persona's identity.
"""
import os
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from utils.exceptions import UnknownPersona


class QuirkKind(Enum):
    NONE = "none"
    LOGIN_BLOCKED = "login_blocked"  # 登录被拒，出现 locked out 提示
    LOGIN_DELAYED = "login_delayed"  # 登录明显变慢
    VISUAL_CORRUPTION = "visual_corruption"  # 商品图片错乱
    ACTION_UNRELIABLE = "action_unreliable"  # 部分按钮操作不生效


class Determinism(Enum):
    DETERMINISTIC = "deterministic"  # 每次都复现，可直接断言
    OBSERVED = "observed"  # 不保证复现，只观察并归类，不断言


# ACTION_UNRELIABLE 的表现不稳定：用例只记录观察到的结果
QUIRK_DETERMINISM = MappingProxyType({
    QuirkKind.NONE: Determinism.DETERMINISTIC,
    QuirkKind.LOGIN_BLOCKED: Determinism.DETERMINISTIC,
    QuirkKind.LOGIN_DELAYED: Determinism.DETERMINISTIC,
    QuirkKind.VISUAL_CORRUPTION: Determinism.DETERMINISTIC,
    QuirkKind.ACTION_UNRELIABLE: Determinism.OBSERVED,
})

PASSWORD = os.getenv("SAUCE_PASSWORD", "secret_sauce")


@dataclass(frozen=True)
class Persona:
    id: str
    username: str
    password: str = field(repr=False)
    expected_quirks: frozenset = frozenset({QuirkKind.NONE})

    def has_quirk(self, quirk: QuirkKind) -> bool:
        return quirk in self.expected_quirks

    @property
    def is_baseline(self) -> bool:
        return self.expected_quirks == frozenset({QuirkKind.NONE})

    @property
    def can_login(self) -> bool:
        return not self.has_quirk(QuirkKind.LOGIN_BLOCKED)


def _persona(persona_id: str, username: str, *quirks: QuirkKind) -> Persona:
    return Persona(persona_id, username, PASSWORD, frozenset(quirks or (QuirkKind.NONE,)))


PERSONAS = MappingProxyType({p.id: p for p in (
    _persona("standard", "standard_user"),
    _persona("locked_out", "locked_out_user", QuirkKind.LOGIN_BLOCKED),
    _persona("problem", "problem_user", QuirkKind.VISUAL_CORRUPTION, QuirkKind.ACTION_UNRELIABLE),
    _persona("performance_glitch", "performance_glitch_user", QuirkKind.LOGIN_DELAYED),
)})

BASELINE_PERSONA_ID = "standard"


def lookup(persona_id: str) -> Persona:
    try:
        return PERSONAS[persona_id]
    except KeyError:
        raise UnknownPersona(f"unknown persona: {persona_id}",
                             {"registered": sorted(PERSONAS)}) from None


def personas_with(quirk: QuirkKind) -> list[Persona]:
    return [p for p in PERSONAS.values() if p.has_quirk(quirk)]


def personas_able_to_login() -> list[Persona]:
    return [p for p in PERSONAS.values() if p.can_login]
