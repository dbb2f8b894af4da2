"""Chrome / Chromium / Edge discovery."""

import os
import shutil
import sys
from typing import Dict, List, Optional

CHROME_PATHS: Dict[str, List[str]] = {
    "win32": [
        r"C:\Program Files\Google\Chrome\Application\chrome.exe",
        r"C:\Program Files (x86)\Google\Chrome\Application\chrome.exe",
        os.path.join(os.environ.get("LOCALAPPDATA", ""), r"Google\Chrome\Application\chrome.exe"),
        r"C:\Program Files\Microsoft\Edge\Application\msedge.exe",
        r"C:\Program Files (x86)\Microsoft\Edge\Application\msedge.exe",
    ],
    "darwin": [
        "/Applications/Google Chrome.app/Contents/MacOS/Google Chrome",
        "/Applications/Microsoft Edge.app/Contents/MacOS/Microsoft Edge",
        "/Applications/Chromium.app/Contents/MacOS/Chromium",
    ],
    "linux": [
        "/usr/bin/google-chrome",
        "/usr/bin/chromium-browser",
        "/usr/bin/chromium",
        "/snap/bin/chromium",
        "/usr/bin/microsoft-edge",
    ],
}

# looked up on PATH when none of the fixed locations exist
CHROME_COMMANDS = ["google-chrome", "google-chrome-stable", "chromium", "chromium-browser", "microsoft-edge"]


def find_chrome_path(platform: Optional[str] = None) -> Optional[str]:
    """Return the first existing browser executable for ``platform``, or None."""
    platform = platform or sys.platform
    for candidate in CHROME_PATHS.get(platform, []):
        if candidate and os.path.isfile(candidate):
            return candidate
    for name in CHROME_COMMANDS:
        found = shutil.which(name)
        if found:
            return found
    return None
