"""Packaging setup with an optional Cython build."""

import logging
import os
import sys
from pathlib import Path

from setuptools import Extension, find_packages, setup
from setuptools.command.build_ext import build_ext


LOGGER = logging.getLogger(__name__)

# Accept several truthy values for CYTHONIZE (so "True", True, "1", "true" all work)
CYTHONIZE_RAW = os.getenv("CYTHONIZE", "0")
CYTHONIZE = str(CYTHONIZE_RAW).strip().lower() in ("1", "true", "yes", "on")

if CYTHONIZE:
    from Cython.Build import cythonize


class ClangBuildExt(build_ext):
    """Build compiled modules with clang-cl when the host compiler is MSVC."""

    def build_extension(self, ext: Extension) -> None:
        """Swap cl.exe for clang-cl on Windows, leave other compilers alone."""
        if self.compiler.compiler_type == "msvc" and hasattr(self.compiler, "cc"):
            LOGGER.debug("Using clang-cl for %s", ext.name)
            self.compiler.cc = "clang-cl"
        super().build_extension(ext)


dist_name = "MobileNet-SSD-Demo"
package_dir = "mobilenet_ssd_demo"
version = Path("VERSION.txt").read_text().strip()

install_requires = [
    "opencv-python>=4.5,<5",
    "numpy>=1.21",
    "loguru>=0.7",
    "psutil>=5.9",
]


def list_py_files(package_dir: str | Path) -> list[str]:
    """Return Python source files under the package directory."""
    root = Path(package_dir)
    return [
        str(path) for path in root.rglob("*.py") if path.name != "__main__.py"
    ]


extensions = []
if CYTHONIZE:
    if sys.platform == "win32":
        extra_compile_args = ["/O2", "/MD"]
        extra_link_args = ["/OPT:REF", "/OPT:ICF"]
    else:
        extra_compile_args = ["-O3", "-fvisibility=hidden"]
        extra_link_args = []

    extensions = [
        Extension(
            py_file.replace(os.path.sep, ".")[:-3],
            [py_file],
            extra_compile_args=extra_compile_args,
            extra_link_args=extra_link_args,
        )
        for py_file in list_py_files(package_dir)
    ]

setup_kwargs = {
    "name": dist_name,
    "version": version,
    "description": "Real-time MobileNet-SSD object detection demo on OpenCV DNN",
    "python_requires": ">=3.10",
    "zip_safe": False,
    "packages": find_packages(include=[package_dir, f"{package_dir}.*"]),
    "install_requires": install_requires,
    "extras_require": {"test": ["pytest>=7"]},
    "entry_points": {
        "console_scripts": ["mobilenet-ssd-demo=mobilenet_ssd_demo.demo:main"],
    },
}

if CYTHONIZE:
    setup_kwargs.update(
        {
            "ext_modules": cythonize(
                extensions,
                compiler_directives={
                    "language_level": "3",
                    "emit_code_comments": False,
                    "binding": False,
                    "annotation_typing": False,
                },
            ),
            "cmdclass": {"build_ext": ClangBuildExt},
            "package_data": {"": ["*.c", "*.so", "*.pyd"]},
        }
    )

setup(**setup_kwargs)
