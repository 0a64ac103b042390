"""
Setup configuration for the Date Organizer package.
"""

from setuptools import setup, find_packages
import os

# Read requirements
def read_requirements():
    requirements_path = os.path.join(os.path.dirname(__file__), 'requirements.txt')
    if os.path.exists(requirements_path):
        with open(requirements_path, 'r', encoding='utf-8') as f:
            return [line.strip() for line in f if line.strip() and not line.startswith('#')]
    return []

setup(
    name="date-organizer",
    version="1.0.0",
    author="Date Organizer Team",
    author_email="",
    description="Copy or move files into YYYY-MM-DD folders by EXIF capture time or modification time",
    long_description="Copies (or moves) files into YYYY-MM-DD folders, dated by EXIF capture time "
                     "for images and by modification time otherwise.",
    long_description_content_type="text/plain",
    url="",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Multimedia",
        "Topic :: Utilities",
    ],
    python_requires=">=3.8",
    install_requires=read_requirements(),
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "date-organizer=date_organizer.main:main",
        ],
    },
    keywords="photos, exif, date, organization, copy, move",
    project_urls={
        "Bug Reports": "",
        "Source": "",
    },
)
