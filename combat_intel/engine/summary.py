"""Human-readable combat summary for logs and the debug endpoint."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from combat_intel.engine.arbiter import CombatEngine


def format_summary(engine: CombatEngine, refresh: bool = True) -> str:
    """Render threat, wave, timing, top priorities and flankers.

    With ``refresh`` the analyzers run first; otherwise only cached results
    are shown.
    """
    if refresh:
        threat = engine.threat.analyze()
        priorities = engine.priority.update()
        wave = engine.wave.find_optimal_cast()
        stack = engine.timing.analyze_stack()
    else:
        threat = engine.last_threat
        priorities = engine.last_priorities
        wave = engine.last_wave
        stack = engine.last_stack

    lines = ["=== Combat Intelligence ===", ""]
    header = f"[Threat Level]: {threat.tier.value.upper()}"
    if threat.group_count > 0:
        header += f" ({threat.group_count} threats, score: {int(threat.total_threat)})"
    lines.append(header)

    if wave is not None:
        line = f"[Wave Optimizer]: {wave.monster_count} targets | Direction: {wave.direction.name.title()}"
        if wave.needs_reposition:
            line += " (reposition recommended)"
        lines += ["", line]

    if stack is not None:
        state = "OPTIMAL" if stack.is_optimal else "waiting..."
        lines += ["", f"[Area Timing]: {stack.stationary}/{stack.total} stationary | {state}"]

    if priorities:
        lines += ["", "[Kill Priority]:"]
        for i, p in enumerate(priorities[:3], start=1):
            lines.append(f"  {i}. {p.name} ({p.health}% HP) - Priority: {int(p.score)}")

    flankers = engine.flankers()
    if flankers:
        lines += ["", f"[!] FLANKERS DETECTED: {len(flankers)}"]
        lines += [f"  - {f.name} (behind you!)" for f in flankers]

    return "\n".join(lines)
