#!/usr/bin/env python3
"""
CPI Wrap iFlow packaging
Zip iFlow directories of a local repository into the archive layout CPILint reads
"""

import zipfile
from pathlib import Path

from cpiwrap.errors import WrapperError


def split_package_iflow(package_iflow: str):
    """
    Split '<package>/<iflow>' into its two parts

    A path with a single component is an iFlow directory at repository root.
    """
    path = Path(package_iflow)
    return str(path.parent), path.name


def archive_path(tmp_dir: Path, package_iflow: str) -> Path:
    """Location of the archive for '<package>/<iflow>': <tmp_dir>/<package>/<iflow>.zip"""
    package, iflow = split_package_iflow(package_iflow)
    return tmp_dir / package / f"{iflow}.zip"


def zip_iflow(repo_dir: Path, tmp_dir: Path, package_iflow: str) -> Path:
    """
    Zip an iFlow directory, paths inside the archive relative to the iFlow

    Args:
        repo_dir: Repository root
        tmp_dir: Directory receiving <package>/<iflow>.zip
        package_iflow: '<package>/<iflow>' relative to repo_dir

    Returns:
        Path of the created archive

    Raises:
        WrapperError: If the iFlow directory does not exist
    """
    iflow_dir = repo_dir / package_iflow
    if not iflow_dir.is_dir():
        raise WrapperError(f"Cannot navigate to iFlow directory: {iflow_dir}")

    target = archive_path(tmp_dir, package_iflow)
    target.parent.mkdir(parents=True, exist_ok=True)

    with zipfile.ZipFile(target, 'w', compression=zipfile.ZIP_DEFLATED) as archive:
        for file_path in sorted(iflow_dir.rglob('*')):
            archive.write(file_path, file_path.relative_to(iflow_dir).as_posix())

    return target
