"""
Quirk configuration.

Each quirk toggles one historically divergent behaviour. The defaults
reproduce the original COSMAC VIP interpreter as checked by the
standard quirks test ROM.
"""

from typing import Dict, Optional

DEFAULT_QUIRKS = {
    'logic': True,       # 8xy1/8xy2/8xy3 reset vF to 0
    'memory': True,      # Fx55/Fx65 increment I register
    'shifting': False,   # 8xy6/8xyE shift vX in place (False = copy vY first)
    'jumping': False,    # Bxnn uses vX instead of v0
    'clipping': True,    # Sprites clip at the screen edge (False = wrap)
}


def resolve_quirks(quirks: Optional[Dict[str, bool]] = None) -> Dict[str, bool]:
    """Merge user overrides over DEFAULT_QUIRKS, rejecting unknown names"""
    resolved = dict(DEFAULT_QUIRKS)
    if not quirks:
        return resolved

    unknown = set(quirks) - set(DEFAULT_QUIRKS)
    if unknown:
        raise ValueError(f"Unknown quirk(s): {', '.join(sorted(unknown))}")

    for name, enabled in quirks.items():
        resolved[name] = bool(enabled)
    return resolved
