from setuptools import setup, find_packages


def parse_requirements_file(path):
    requirements = []
    with open(path) as requirements_file:
        for line in requirements_file:
            line = line.strip()
            if line.startswith("#") or len(line) <= 0:
                continue
            requirements.append(line)
    return requirements


# Load requirements.
install_requirements = parse_requirements_file("requirements.txt")
extras = {"dev": parse_requirements_file("dev-requirements.txt")}

# version.py defines the VERSION and VERSION_SHORT variables.
# We use exec here so we don't import the package whilst setting up.
VERSION = {}  # type: ignore
with open("changelog_release/version.py", "r") as version_file:
    exec(version_file.read(), VERSION)

setup(
    name="release-changelog",
    version=VERSION["VERSION"],
    description="Promote the Unreleased section of a Keep a Changelog file into a new release.",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Intended Audience :: Developers",
        "Development Status :: 3 - Alpha",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3",
        "Topic :: Software Development :: Build Tools",
    ],
    keywords="changelog release keepachangelog",
    license="Apache",
    packages=find_packages(
        exclude=["*.tests", "*.tests.*", "tests.*", "tests", "test_fixtures", "test_fixtures.*"],
    ),
    entry_points={"console_scripts": ["release-changelog=changelog_release.__main__:main"]},
    install_requires=install_requirements,
    extras_require=extras,
    python_requires=">=3.8",
)
