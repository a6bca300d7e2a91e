"""Packaging for Interval Alarm.

Install for development:
    pip install -e ".[test]"

Build a macOS .app bundle:
    pip install py2app
    python setup.py py2app
"""

import sys

from setuptools import setup, find_packages

APP = ["main.py"]
DATA_FILES = []
OPTIONS = {
    "argv_emulation": False,
    "iconfile": None,  # Replace with .icns path when a proper icon exists
    "plist": {
        "CFBundleName": "IntervalAlarm",
        "CFBundleDisplayName": "Interval Alarm",
        "CFBundleIdentifier": "com.intervalalarm.app",
        "CFBundleVersion": "0.1.0",
        "CFBundleShortVersionString": "0.1.0",
        "NSHighResolutionCapable": True,
        "LSMinimumSystemVersion": "13.0",
        "LSBackgroundOnly": False,
    },
}

# py2app only matters when actually building the bundle.
app_kwargs = {}
if "py2app" in sys.argv:
    app_kwargs = dict(
        app=APP,
        data_files=DATA_FILES,
        options={"py2app": OPTIONS},
        setup_requires=["py2app"],
    )

setup(
    name="IntervalAlarm",
    version="0.1.0",
    packages=find_packages(include=["intervalalarm", "intervalalarm.*"]),
    python_requires=">=3.10",
    install_requires=[
        "PyQt6>=6.4",
        "SQLAlchemy>=2.0",
        "click>=8.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": ["intervalalarm=intervalalarm.__main__:main"],
    },
    **app_kwargs,
)
