"""
Setup script for lobby-client package with optional Cython compilation.

This builds the internal modules (_*.py) as compiled extensions when
Cython is available, while keeping the public API (client.py, errors.py,
types.py, cli.py) as readable Python source.
"""

from setuptools import setup, find_packages, Extension
import os

# Check if Cython is available
try:
    from Cython.Build import cythonize
    USE_CYTHON = True
except ImportError:
    USE_CYTHON = False
    print("Cython not found. Building without compilation (source only).")

# Internal modules to compile with Cython
CYTHON_MODULES = [
    "src/lobby_client/_client_config.py",
    "src/lobby_client/_session/state_machine.py",
    "src/lobby_client/_shared/envelope.py",
    "src/lobby_client/_shared/routes.py",
]


def get_extensions():
    """Build Extension objects for Cython compilation."""
    if not USE_CYTHON:
        return []

    extensions = []
    for module_path in CYTHON_MODULES:
        if os.path.exists(module_path):
            # Convert path to module name: src/lobby_client/_foo.py -> lobby_client._foo
            module_name = module_path.replace("src/", "").replace("/", ".").replace(".py", "")
            extensions.append(
                Extension(
                    name=module_name,
                    sources=[module_path],
                )
            )
    return extensions


def get_ext_modules():
    """Get extension modules, cythonized if Cython is available."""
    extensions = get_extensions()
    if not extensions:
        return []

    return cythonize(
        extensions,
        compiler_directives={
            "language_level": "3",
            "boundscheck": False,
            "wraparound": False,
        },
        nthreads=os.cpu_count() or 1,
    )


# Only add ext_modules if we have Cython
ext_modules = get_ext_modules() if USE_CYTHON else []

setup(
    name="lobby-client",
    version="1.0.0",
    description="Session client for an HTTP+JSON matchmaking lobby server",
    python_requires=">=3.10",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    ext_modules=ext_modules,
    install_requires=[
        "requests>=2.28.0",
        "python-dotenv>=1.0.0",
        "pydantic>=2.5.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
        "dev": [
            "pytest>=7.0",
            "cython>=3.0",
            "build",
            "wheel",
        ],
    },
    entry_points={
        "console_scripts": [
            "lobby-client=lobby_client.cli:main",
        ],
    },
    package_data={
        "lobby_client": ["*.so", "*.pyd"],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Cython",
    ],
)
