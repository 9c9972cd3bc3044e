"""
Setup file for superstore_pipeline package - Configures Apache Beam pipeline for enriching Superstore sales data
--------------------------------
Reads the monthly sales extract staged in Azure Blob Storage, filters and enriches it,
and writes the result to files and to a Snowflake table for reporting.
"""


from setuptools import setup, find_packages

setup(
    name="superstore_pipeline",
    version="0.1.0",
    description="Apache Beam pipeline for Superstore sales enrichment",  # Brief description
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.9",  #  minimum Python version
    install_requires=[
        "apache-beam[azure]>=2.50.0",  #  azfs:// filesystem for the blob stage
        "pandas>=2.0",
        "pyarrow>=6.0.0"
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-mock>=3.10",
            "psutil>=5.9",
        ],
    },
    entry_points={
        "console_scripts": [
            "superstore-pipeline=superstore_pipeline.main:main",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
    ],
)
