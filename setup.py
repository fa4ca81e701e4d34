from setuptools import setup, find_packages

setup(
    name="terraform-profile",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "terraform-profile=terraform_profile.cli:main",
        ],
    },
    python_requires=">=3.8",
    description="Switch between multiple Terraform Cloud credentials files",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
