"""
Font family enumeration for setli.

Asks the host's text-rendering subsystem which families are available:
fontconfig on Linux, system_profiler on macOS, the font registry on Windows.
"""

import json
import logging
import re
import subprocess
import sys
from typing import Iterator, List, Set

from .errors import FontEnumerationError

logger = logging.getLogger(__name__)

FC_LIST_COMMAND = ["fc-list", ":", "family"]
SYSTEM_PROFILER_COMMAND = ["system_profiler", "SPFontsDataType", "-json"]
WINDOWS_FONTS_KEY = r"SOFTWARE\Microsoft\Windows NT\CurrentVersion\Fonts"

# Trailing words in Windows registry font names that name a style, not a family
WINDOWS_STYLE_WORDS = {
    "Black",
    "Bold",
    "ExtraBold",
    "ExtraLight",
    "Italic",
    "Light",
    "Medium",
    "Oblique",
    "Regular",
    "SemiBold",
    "Semibold",
    "SemiLight",
    "Semilight",
    "Thin",
}


def list_font_families(timeout: float = 10.0) -> List[str]:
    """
    List the font families known to the host text-rendering subsystem.

    Returns:
        Sorted, de-duplicated family names

    Raises:
        FontEnumerationError: If the platform's enumeration fails
    """
    if sys.platform == "darwin":
        families = _macos_families(timeout)
    elif sys.platform == "win32":
        families = _windows_families()
    else:
        families = _fontconfig_families(timeout)

    logger.debug("Found %d font families", len(families))
    return sorted(families)


def _run(command: List[str], timeout: float) -> str:
    try:
        result = subprocess.run(
            command,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except FileNotFoundError as e:
        raise FontEnumerationError(f"{command[0]} not found") from e
    except (subprocess.TimeoutExpired, subprocess.SubprocessError) as e:
        raise FontEnumerationError(f"Font enumeration failed: {e}") from e

    if result.returncode != 0:
        raise FontEnumerationError(
            f"{command[0]} exited with {result.returncode}: {result.stderr.strip()}"
        )
    return result.stdout


def _fontconfig_families(timeout: float) -> Set[str]:
    """Each fc-list line may carry several comma separated aliases; all are kept."""
    try:
        output = _run(FC_LIST_COMMAND, timeout)
    except FontEnumerationError as e:
        if isinstance(e.__cause__, FileNotFoundError):
            raise FontEnumerationError("fc-list not found; is fontconfig installed?") from e
        raise

    families = set()
    for line in output.splitlines():
        for name in line.split(","):
            name = name.replace("\\", "").strip()
            if name:
                families.add(name)
    return families


def _macos_families(timeout: float) -> Set[str]:
    output = _run(SYSTEM_PROFILER_COMMAND, timeout)
    try:
        data = json.loads(output)
    except json.JSONDecodeError as e:
        raise FontEnumerationError(f"Unreadable system_profiler output: {e}") from e

    families = set()
    for font in data.get("SPFontsDataType", []):
        for typeface in font.get("typefaces", []):
            family = typeface.get("family")
            if family:
                families.add(family)
    return families


def _windows_families() -> Set[str]:
    """Read installed fonts from the machine and per-user font registry keys."""
    import winreg

    families = set()
    found = False
    for root in (winreg.HKEY_LOCAL_MACHINE, winreg.HKEY_CURRENT_USER):
        try:
            with winreg.OpenKey(root, WINDOWS_FONTS_KEY) as key:
                index = 0
                while True:
                    try:
                        name, _data, _type = winreg.EnumValue(key, index)
                    except OSError:
                        break
                    families.update(windows_family_names(name))
                    index += 1
            found = True
        except FileNotFoundError:
            # The per-user key only exists once a user installs a font
            continue
        except OSError as e:
            raise FontEnumerationError(f"Cannot read font registry: {e}") from e

    if not found:
        raise FontEnumerationError("Font registry key not found")
    return families


def windows_family_names(value_name: str) -> Iterator[str]:
    """
    Family names in a font registry value name.

    "Cambria & Cambria Math (TrueType)" yields "Cambria" and "Cambria Math";
    "Arial Bold Italic (TrueType)" yields "Arial".
    """
    name = re.sub(r"\s*\([^)]*\)$", "", value_name)
    for part in name.split(" & "):
        words = part.split()
        while len(words) > 1 and words[-1] in WINDOWS_STYLE_WORDS:
            words.pop()
        if words:
            yield " ".join(words)
