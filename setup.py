"""
portlet-context - root application context lookup for portlet applications

This setup.py file is provided for pip install compatibility.
"""

from pathlib import Path

from setuptools import find_packages, setup

HERE = Path(__file__).parent

if __name__ == "__main__":
    setup(
        name="portlet-context",
        version="0.1.0",
        description="Lookup helpers and loader for the root application context "
        "stored in a shared portlet container.",
        long_description=(HERE / "README.md").read_text(encoding="utf-8"),
        long_description_content_type="text/markdown",
        package_dir={"": "src"},
        packages=find_packages("src"),
        python_requires=">=3.11",
        install_requires=[
            "pydantic>=2.0",
            "PyYAML>=6.0",
        ],
        extras_require={
            "test": ["pytest>=7.0"],
        },
        classifiers=[
            "Development Status :: 4 - Beta",
            "Intended Audience :: Developers",
            "License :: OSI Approved :: Apache Software License",
            "Programming Language :: Python :: 3",
            "Programming Language :: Python :: 3.11",
            "Programming Language :: Python :: 3.12",
        ],
    )
