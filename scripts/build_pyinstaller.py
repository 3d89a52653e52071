#!/usr/bin/env python3
"""Build Tilesmith using PyInstaller."""

import subprocess
import sys
from pathlib import Path


def build():
    project_root = Path(__file__).parent.parent
    main_script = project_root / "src" / "tilesmith" / "__main__.py"

    args = [
        sys.executable,
        "-m",
        "PyInstaller",
        str(main_script),
        "--name=Tilesmith",
        "--windowed",
        "--noconfirm",
        # Only QtCore/QtGui/QtWidgets are used
        "--exclude-module=PySide6.QtWebEngineCore",
        "--exclude-module=PySide6.QtWebEngineWidgets",
        "--exclude-module=PySide6.QtMultimedia",
        "--exclude-module=PySide6.QtQuick",
        "--exclude-module=PySide6.QtQml",
        "--exclude-module=PySide6.QtSql",
        "--exclude-module=PySide6.QtPdf",
        "--exclude-module=tkinter",
        "--exclude-module=numpy",
        # Paths
        f"--distpath={project_root / 'dist'}",
        f"--workpath={project_root / 'build'}",
        f"--specpath={project_root}",
        "--hidden-import=PIL.Image",
        "--collect-submodules=tilesmith",
        f"--paths={project_root / 'src'}",
        f"--add-data={project_root / 'src' / 'tilesmith' / 'locales'}:tilesmith/locales",
    ]

    if sys.platform == "darwin":
        args.append("--osx-bundle-identifier=com.tilesmith.app")

    print("Building Tilesmith...")
    print(f"Command: {' '.join(args)}")

    result = subprocess.run(args, cwd=project_root)

    if result.returncode == 0:
        print("\nBuild successful!")
        print(f"Output: {project_root / 'dist'}")
    else:
        print("\nBuild failed!")
        sys.exit(1)


if __name__ == "__main__":
    build()
