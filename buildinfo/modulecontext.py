# buildinfo - build-time properties file generator
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
Contains `ModuleContext`, the view of the build that a module has while it generates its build actions.
"""

import os
import collections

from buildinfo.utils.buildexceptions import BuildException

InstallRule = collections.namedtuple('InstallRule', ['installPath', 'moduleName', 'sourcePath'])
""" Records that the module's output at sourcePath should be installed to installPath. """

class ModuleContext(object):
	"""
	Passed to `buildinfo.basemodule.BaseModule.generateBuildActions`. Gives access to the immutable build
	configuration, resolves the output and install paths for the module, and collects the actions and install
	rules the module registers.

	Modules never reach past this object to the rest of the build.
	"""

	def __init__(self, module, buildContext):
		self.__module = module
		self.__config = buildContext
		self.__actions = []
		self.__installs = []

	def config(self):
		""" Returns the `buildinfo.buildcontext.BuildContext` configuration snapshot. """
		return self.__config

	def katiEnabled(self):
		return self.__config.katiEnabled()

	def module(self):
		return self.__module

	def moduleName(self):
		return self.__module.name

	def pathForModuleOut(self, *parts):
		""" Returns a path in the intermediates directory unique to this module: ``${OUTPUT_DIR}/intermediates/<module>/<parts>``. """
		return os.path.join(self.__config.getPropertyValue('OUTPUT_DIR'), 'intermediates', self.__module.name, *parts)

	def pathForModuleInstall(self, *parts):
		""" Returns a path in the install directory of the target image: ``${PRODUCT_OUT}/system/<parts>``. """
		return os.path.join(self.__config.getPropertyValue('PRODUCT_OUT'), 'system', *parts)

	def installFile(self, installDir, name, src):
		""" Registers that the output file src should be installed as installDir/name, and returns the `InstallRule`.

		If the module has called `buildinfo.basemodule.BaseModule.skipInstall` the rule is still recorded, but the
		executor will not perform it.
		"""
		rule = InstallRule(os.path.join(installDir, name), self.__module.name, src)
		if [i for i in self.__installs if i.installPath == rule.installPath]:
			raise BuildException('Duplicate install path: %s'%rule.installPath)
		self.__installs.append(rule)
		return rule

	def addAction(self, action):
		""" Registers an action (for example a `buildinfo.rulebuilder.CommandAction`) to be executed during the build. """
		action.module = self.__module
		self.__actions.append(action)
		return action

	def getActions(self):
		return list(self.__actions)

	def getInstalls(self):
		return list(self.__installs)
