# buildinfo - build-time properties file generator
#
# This module holds definitions that are used throughout the build system, and
# typically all names from this module will be imported.
#
# Copyright (c) 2013 - 2019 Software AG, Darmstadt, Germany and/or its licensors
#
#   Licensed under the Apache License, Version 2.0 (the "License");
#   you may not use this file except in compliance with the License.
#   You may obtain a copy of the License at
#
#       http://www.apache.org/licenses/LICENSE-2.0
#
#   Unless required by applicable law or agreed to in writing, software
#   distributed under the License is distributed on an "AS IS" BASIS,
#   WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#   See the License for the specific language governing permissions and
#   limitations under the License.
#

"""
Contains standard functionality for use in build files such as `buildinfo.buildcommon.include`, and useful
constants such as `buildinfo.buildcommon.IS_WINDOWS`.
"""

import os, io
import platform

import logging
# do NOT define a 'log' variable here or modules will use it by mistake

def __getBuildinfoVersion():
	with open(os.path.join(os.path.dirname(os.path.abspath(__file__)), "BUILDINFO_VERSION")) as f:
		return f.read().strip()
BUILDINFO_VERSION: str = __getBuildinfoVersion()
"""The current buildinfo version."""

IS_WINDOWS: bool = platform.system()=='Windows'
""" A boolean that specifies whether this is Windows or some other operating system. """

def include(file):
	""" Parse and register the modules and properties in the specified
	``XXX.buildinfo.py`` file.

	Modules should only be defined in files included using this method,
	not using python import statements.

	@param file: a path relative to the directory containing the current build file.
	"""
	from buildinfo.buildcontext import getBuildInitializationContext

	init = getBuildInitializationContext()
	file = init.expandPropertyValues(file)

	assert file.endswith('.buildinfo.py') # enforce recommended naming convention

	filepath = init.getFullPath(file, os.path.dirname(init._currentBuildFile[-1]))

	init._currentBuildFile.append(filepath) # add to stack of files being parsed
	try:
		namespace = {}
		with io.open(filepath, "rb") as f:
			exec(compile(f.read(), filepath, 'exec'), namespace, namespace)
	finally:
		del init._currentBuildFile[-1]

	return namespace
