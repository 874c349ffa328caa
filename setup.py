import setuptools

setuptools.setup(
	name='metawalk',
	version='0.1.0',
	packages=[
		'metawalk',
		'metawalk.parsing',
		'metawalk.scanning',
		'metawalk.support',
	],
	description='A backtracking interpreter that parses text directly against EBNF-style grammar schemas',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	python_requires='>=3.9',
	classifiers=[
		"Programming Language :: Python :: 3.9",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Topic :: Software Development :: Compilers",
		"Development Status :: 3 - Alpha",
    ],
)
