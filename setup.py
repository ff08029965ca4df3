# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="workspace-vfs",
    version="1.0.0",
    description="In-memory virtual file system backing an assistant-driven editing workspace",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["workspace_vfs*"]),
    python_requires=">=3.9",
    install_requires=[
        "requests",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'workspace-vfs=workspace_vfs.interface.cli.app:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
