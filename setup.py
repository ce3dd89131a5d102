import pathlib
from sys import version_info

from setuptools import find_packages
from setuptools import setup

install_requires = [
    "typing_extensions; python_version < '3.8.0'",
    "rich >= 11.2.0",
]

lint_requires = [
    "black",
    "flake8",
    "isort",
    "mypy",
]

test_requires = [
    "pytest",
    "pytest-cov",
]

about = {}
with open("src/memreport/_version.py") as fp:
    exec(fp.read(), about)


HERE = pathlib.Path(__file__).parent.resolve()
LONG_DESCRIPTION = (HERE / "README.md").read_text(encoding="utf-8")

setup(
    name="memreport",
    version=about["__version__"],
    python_requires=">=3.7.0",
    description="Memory analysis reports from allocation capture snapshots",
    long_description=LONG_DESCRIPTION,
    long_description_content_type="text/markdown",
    classifiers=[
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Debuggers",
    ],
    license="Apache 2.0",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    include_package_data=True,
    install_requires=install_requires,
    extras_require={
        "test": test_requires,
        "lint": lint_requires,
        "dev": test_requires + lint_requires,
    },
    entry_points={
        "console_scripts": [
            f"memreport{version_info.major}.{version_info.minor}=memreport.__main__:main",
            "memreport=memreport.__main__:main",
        ],
    },
)
