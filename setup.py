from setuptools import setup, find_packages

# Read the contents of README.md for the long description
with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

requirements = [
    "click>=8.1.7,<9",
    "mcp>=1.20.0,<2",
    "python-dotenv>=1.0.1,<2",
    "rich>=13.8.1,<15",
]

test_requirements = [
    "pytest>=8.3.2",
    "pytest-asyncio>=0.23.0",
    "jsonschema>=4.20.0",
]

setup(
    name="dart-mcp-server",
    version="1.0.0",
    description="MCP server exposing the Dart/Flutter command-line toolchain as tools",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=requirements,
    extras_require={"test": test_requirements},
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
        "Environment :: Console",
        "Topic :: Software Development :: Build Tools",
    ],
    python_requires=">=3.10",
    entry_points={
        "console_scripts": [
            "dart-mcp=dart_mcp.cli:main",
        ],
    },
    include_package_data=True,
    keywords=[
        "dart",
        "flutter",
        "mcp",
        "model context protocol",
    ],
    license="MIT",
)
