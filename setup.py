import setuptools

setuptools.setup(
	name='particle',
	version='0.1.0',
	packages=[
		'particle',
		'particle.scanning',
		'particle.support',
	],
	description='Lexical analysis from a list of regular expressions: NFA, DFA, minimization, and a maximal-munch scanner',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	python_requires='>=3.7',
	classifiers=[
		"Programming Language :: Python :: 3",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Topic :: Software Development :: Compilers",
		"Development Status :: 3 - Alpha",
    ],
)
