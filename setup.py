"""
Installation setup for ptcgjson
"""
import configparser
import pathlib

import setuptools

# Establish project directory
project_root: pathlib.Path = pathlib.Path(__file__).resolve().parent

# Read config details to determine version-ing
config_file = project_root.joinpath("ptcgjson/resources/ptcgjson.properties")
config = configparser.ConfigParser()
if config_file.is_file():
    config.read(str(config_file))


def read_requirements(file_name: str) -> list:
    """
    Requirement lines of a requirements file, if able
    """
    requirements_file = project_root.joinpath(file_name)
    if not requirements_file.is_file():
        return []
    return [
        line.strip()
        for line in requirements_file.open(encoding="utf-8").readlines()
        if line.strip() and not line.startswith("#")
    ]


setuptools.setup(
    name="ptcgjson",
    version=config.get("PTCGJSON", "version", fallback="1.0.0+fallback"),
    description="Pokemon TCG card & pricing JSON generator for storefronts",
    long_description=project_root.joinpath("README.md").open(encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    license="MIT",
    python_requires=">=3.8",
    classifiers=[
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python",
        "Topic :: Database",
    ],
    keywords=[
        "Card Games",
        "Collectible",
        "JSON",
        "Pokemon",
        "PTCG",
        "Shopify",
        "Trading Cards",
    ],
    include_package_data=True,
    package_data={"ptcgjson": ["resources/*.properties"]},
    packages=setuptools.find_packages(exclude=["tests", "tests.*"]),
    install_requires=read_requirements("requirements.txt"),
    extras_require={"test": read_requirements("requirements_test.txt")},
    entry_points={"console_scripts": ["ptcgjson=ptcgjson.__main__:main"]},
)
