# buildinfo - build-time properties file generator
#
# Contains the base class for creating various kinds of build module.
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
Contains `buildinfo.basemodule.BaseModule` which contains
methods such as `basemodule.BaseModule.option` for configuring the module instances
in your build files, and is also the base class for defining new module types.

"""

import logging

from buildinfo.buildcontext import getBuildInitializationContext
from buildinfo.utils.buildexceptions import BuildException

class BaseModule(object):
	""" The base class for all build modules.

	.. rubric:: Configuring modules in your build files

	The following methods can be used to configure any module instance you add to a build file:

	.. autosummary ::
		option

	.. rubric:: Implementing a new module class

	If you are subclassing ``BaseModule`` to create a new module class, you must implement `generateBuildActions`,
	which registers the actions that produce the module's outputs with the `buildinfo.modulecontext.ModuleContext`.
	Modules that produce files should also implement `outputFiles`, and modules that need to be visible to a
	make-driven build should implement `makeEntries`.

	Set the class attribute ``singleton = True`` if at most one instance of the module type may be declared per build.

	This class provides several read-only attributes for use by subclasses.

	:ivar str name: The name of the module instance.

	:ivar str type: The name of the module class.

	:ivar dict options: The resolved option values for this module, available once build actions are being generated.
	"""

	singleton = False

	def __init__(self, name):
		self.__getAttrImpl = {
			'name': lambda: self.__name,
			'type': lambda: self.__class__.__name__,
			'options': lambda: self.__returnOrRaiseIfNone(self.__optionsResolved, "Cannot read the value of module options during the initialization phase of the build as the resolved option values are not yet available"),
		}

		if not name or not name.strip():
			raise BuildException('Invalid module name: name must not be empty')
		if '/' in name or '\\' in name:
			raise BuildException('Invalid module name: path separators are not permitted: %s'%name)
		self.__name = name

		self.__optionsModuleOverridesUnresolved = {} # for module-specific option overrides
		self.__optionsResolved = None # gets assigned when build actions are generated
		self.__installSkipped = False

		self.log = logging.getLogger(self.__class__.__name__)

		# use a space to delimit these to make it easier to copy to the clipboard by double-clicking
		self.__stringvalue = '<%s> %s'%(self.type, self.name)

		init = getBuildInitializationContext()
		if init: # None in doc-test mode
			init.registerModule(self) # this can throw

	def __returnOrRaiseIfNone(self, value, exceptionMessage):
		if value is not None: return value
		raise Exception(exceptionMessage)

	def __getattr__(self, name):
		""" Getter for read-only attributes """
		# nb this is not called for fields that have been set explicitly using self.X = ...
		try:
			return self.__getAttrImpl[name]()
		except KeyError:
			raise AttributeError('Unknown attribute %s'%name)

	def __str__(self): # string display name which is used for log statements etc
		""" Returns a display name including the module name and the module type (class) """
		return self.__stringvalue

	def option(self, key, value):
		"""Called by build file authors to configure this module instance with an override for an option value.

		If no override is provided, the value set in `buildinfo.propertysupport.setGlobalOption` for the whole build
		is used, or if that was not set then the default when the option was defined.

		@param key: The name of a previously-defined option.

		@param value: The value. If the value is a string and contains any property values these will be expanded
		before the option value is passed to the module.
		"""
		self.__optionsModuleOverridesUnresolved[key] = value
		return self

	def _getOptionOverrides(self):
		return self.__optionsModuleOverridesUnresolved

	def _resolveOptions(self, context):
		""" Called by the framework before build actions are generated to resolve the option values for this module. """
		self.__optionsResolved = context.mergeOptions(self)

	def getOption(self, key, errorIfNone=True):
		""" Module classes can call this while generating build actions to get the resolved value of an option.

		This method cannot be used while the build files are still being loaded.
		"""
		if key not in self.options: raise Exception('Module tried to access an option key that does not exist: %s'%key)
		v = self.options[key]
		if errorIfNone and v is None:
			raise BuildException('This module requires a value to be specified for option "%s" (see basemodule.option or setGlobalOption)'%key)
		return v

	def skipInstall(self):
		""" Marks this module's outputs as not installable. They are still built and can still be queried with
		`outputFiles`, but are not copied into the install directory or listed in the installed-files manifest. """
		self.__installSkipped = True

	def isInstallSkipped(self) -> bool:
		return self.__installSkipped

	def generateBuildActions(self, ctx):
		""" Called by the framework once per build to register the actions that produce this module's outputs.

		@param ctx: the `buildinfo.modulecontext.ModuleContext` for this module.
		"""
		raise NotImplementedError('Not implemented by %s'%self.type)

	def preview(self, config):
		""" Returns the text of the file this module generates for the specified configuration, or None if that
		cannot be determined without running its build actions. """
		return None

	def outputFiles(self, tag):
		""" Returns the list of output paths produced by this module for the specified tag, where the empty string
		is the default tag. Only valid once build actions have been generated. """
		raise BuildException('unsupported tag "%s"'%tag)

	def makeEntries(self):
		""" Returns a list of `buildinfo.makeentries.MakeEntries` describing this module for a make-driven build. """
		return []
