from setuptools import setup, find_packages

setup(
    name="gitkeep-manager",
    version="1.0.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "pyyaml",
        "pydantic>=2",
    ],
    extras_require={
        'dev': [
            'pytest',
            'build',
            'twine',
            'wheel'
        ],
    },
    python_requires='>=3.9',
    description="Keeps .gitkeep files in sync with empty directories, honouring .gitignore rules",
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    author="Your Name",
    author_email="your.email@example.com",
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
    ],
    entry_points={
        'console_scripts': [
            'gitkeep=gitkeep.main:main',
        ],
    },
)
