# python setup.py build_ext -i clean
import os
import sys

from Cython.Build import cythonize
from setuptools import Extension, find_packages, setup

COMPILER_DIRECTIVES = {
    "language_level": 3,
    "boundscheck": True,
    "wraparound": True,
    "initializedcheck": False,
    "nonecheck": False,
    "cdivision": False,
    "profile": False,
    # keep Python semantics for annotated arguments (numpy ints, bools)
    "annotation_typing": False,
}

# pure Python modules compiled with Cython
py_files = [
    ("src.dway_heap.positions", "src/dway_heap/positions.py"),
    ("src.dway_heap.dway_heap", "src/dway_heap/dway_heap.py"),
]


def create_extensions(py_files: list[tuple]) -> list[Extension]:
    """
    Create Cython extension for all available modules.

    Parameters
    ----------
    py_files : list[tuple]
        A list of tuples. The first element of the tuple is the module in
        `Package.module` format. The second element is the `path` to the file.

    Returns
    -------
    list[Extension]
        A list of Cython extensions
    """
    extensions = []
    for module_name, py_path in py_files:
        extra_compile_args = []

        if sys.platform != "win32":
            extra_compile_args.append("-O3")

        extension = Extension(
            name=module_name,
            sources=[py_path],
            extra_compile_args=extra_compile_args,
            language="c"
        )
        extensions.append(extension)
    return extensions


def main() -> None:
    """Main setup function for compiling"""
    # Filter out non-existing files
    files = [
        (name, path)
        for name, path in py_files
        if os.path.exists(path)
    ]

    if not files:
        raise RuntimeError("No modules found to compile")

    extensions = create_extensions(files)

    setup(
        ext_modules=cythonize(
            extensions,
            compiler_directives=COMPILER_DIRECTIVES,
            language_level=3
        ),
        packages=find_packages(include=["src", "src.*"]),
        zip_safe=False
    )


if __name__ == "__main__":
    main()
