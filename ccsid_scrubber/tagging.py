#!/usr/bin/env python3
"""
CCSID tagging of output files on IBM i
"""

import logging
import os
import platform
import re
import subprocess
from typing import List, Optional

from .exceptions import TaggingFailure

DEFAULT_TAG_TOOL = "/QOpenSys/usr/bin/setccsid"

_IBM_I_SYSTEM = re.compile(r"(?i)^os/?400$")


def is_ibm_i() -> bool:
    """True when running in IBM i PASE"""
    return bool(_IBM_I_SYSTEM.match(platform.system()))


class CcsidTagger:
    """Stamps a file with its CCSID using the platform's setccsid tool"""

    def __init__(self, config: Optional[dict] = None):
        config = config or {}
        self.enabled = config.get("enabled", True)
        self.tool = config.get("tool", DEFAULT_TAG_TOOL)
        self.logger = logging.getLogger(__name__)

    def _get_tag_command(self, file_path: str, ccsid: int) -> List[str]:
        return [self.tool, str(ccsid), os.path.abspath(file_path)]

    def _run_tag_command(self, command: List[str]) -> int:
        """Run the tool with inherited stdout/stderr and return its exit code"""
        try:
            result = subprocess.run(command, stdout=None, stderr=None)
        except OSError as e:
            raise TaggingFailure(
                f"Could not run tagging command: {' '.join(command)}: {e}"
            ) from e
        return result.returncode

    def tag(self, file_path: str, ccsid: Optional[int]) -> bool:
        """
        Tag a file with a CCSID, best effort.

        Args:
            file_path: File to tag
            ccsid: CCSID to set; None or negative means do not tag

        Returns:
            True if the tool ran and exited with status 0
        """
        if not self.enabled or ccsid is None or ccsid < 0 or not is_ibm_i():
            self.logger.debug("Skipping setting of CCSID tag")
            return False

        self.logger.debug(
            f"Trying to set CCSID of file '{os.path.basename(file_path)}' to {ccsid}"
        )
        try:
            rc = self._run_tag_command(self._get_tag_command(file_path, ccsid))
        except TaggingFailure as e:
            self.logger.warning(str(e))
            return False

        self.logger.debug(f"CCSID set rc={rc}")
        if rc != 0:
            self.logger.warning(
                f"Tagging {file_path} with CCSID {ccsid} failed with exit code {rc}"
            )
            return False
        return True
