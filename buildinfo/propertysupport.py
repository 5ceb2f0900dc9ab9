# buildinfo - build-time properties file generator
#
# Support for defining properties of various types, for use by build files.
#
# Copyright (c) 2013 - 2017, 2019 Software AG, Darmstadt, Germany and/or its licensors
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
Contains functions for use in build files when you need to define and use properties and options.

.. rubric:: Build properties

Properties are named, immutable values that are defined in build files (or read from a ``.properties file``), and can
be used throughout the build using ``${PROP_NAME}`` syntax. Every property must be defined exactly once. There are
several permitted types for property values, and the type is indicated where they are defined:

.. autosummary::
	defineStringProperty
	definePathProperty
	defineOutputDirProperty
	defineEnumerationProperty
	defineBooleanProperty
	defineIntegerProperty
	defineListProperty
	definePropertiesFromFile

The standard product configuration properties (``PLATFORM_SDK_VERSION`` etc.) are typed automatically, even when
their values come from a ``.properties`` file; see `buildinfo.productconfig`.

Properties can be overridden on the command line using ``PROPNAME=value`` or from an environment variable
if the `enableEnvironmentPropertyOverrides` function is called.

To see a list of the property names and values for the current build, run::

	buildinfo --properties

.. rubric:: Module options

Options customize the behaviour of modules either globally throughout the build or for specific
modules. To set the value of an option for all modules in the build call `setGlobalOption()` from the build file.
To override an option for an individual module, call `buildinfo.basemodule.BaseModule.option()`.

To see a list of the option names and global values, run::

	buildinfo --options

"""

import os
import re
import logging

__log = logging.getLogger('propertysupport') # cannot call it log cos this gets imported a lot

from buildinfo.buildcontext import BuildInitializationContext, getBuildInitializationContext
from buildinfo.buildcommon import *
from buildinfo.utils.buildexceptions import BuildException
from buildinfo.utils.fileutils import parsePropertiesFile
from buildinfo.utils.flatten import splitList

# All the public methods that build authors are expected to use to interact with properties and options

def defineStringProperty(name, default):
	""" Define a string property which can be used in ${...} substitution.

	Do not use this generic function for any properties representing a file
	system path, or a boolean/enumeration.

	@param name: The property name

	@param default: The default value of the property (can contain other ${...} variables)
	If set to None, the property must be set on the command line each time

	@return: the value assigned to the property
	"""
	init = BuildInitializationContext.getBuildInitializationContext()
	if init: return init.defineProperty(name, default, lambda v: BuildInitializationContext.getBuildInitializationContext().expandPropertyValues(str(v)))

def definePathProperty(name, default, mustExist=False):
	""" Define a string property that will be converted to an absolute path.

	Path is normalized and any trailing slashes are removed. An error is raised
	if the path does not exist when the property is defined if mustExist=True.

	@param name: The name of the property

	@param default: The default path value of the property (can contain other ${...} variables).
	If a relative path, will be resolved relative to the build file in
	which it is defined.
	If set to None, the property must be set on the command line each time

	@param mustExist: True if it's an error to specify a directory that doesn't
	exist (will raise a BuildException)
	"""

	# Expands properties, makes the path absolute, checks that it looks sensible and (if needed) whether the path exists
	def _coerceToValidValue(value):
		init = BuildInitializationContext.getBuildInitializationContext()
		value = init.expandPropertyValues(value)

		if not os.path.isabs(value):
			# must absolutize this, as otherwise it might be used from a build
			# file in a different location, resulting in the same property
			# resolving to different effective values in different places
			value = os.path.join(init.getCurrentBuildDir(), value)

		value = os.path.normpath(value).rstrip('/\\')
		if mustExist and not os.path.exists(value):
			raise BuildException('Invalid path property value for "%s" - path "%s" does not exist' % (name, value))
		return value

	init = BuildInitializationContext.getBuildInitializationContext()
	if init: return init.defineProperty(name, default, coerceToValidValue=_coerceToValidValue)

def defineOutputDirProperty(name, default):
	""" Define a string property that will also be registered as an output directory (indicating that it will
	always be deleted during a clean).

	Equivalent to calling `definePathProperty` then `registerOutputDirProperties`.
	"""
	value = definePathProperty(name, default)
	registerOutputDirProperties(name)
	return value

def registerOutputDirProperties(*propertyNames):
	""" Registers the specified path property name(s) as being an output directory
	of this build, meaning that they will be created automatically at the
	beginning of the build process, and removed during a clean.
	"""
	init = BuildInitializationContext.getBuildInitializationContext()
	if init:
		for p in propertyNames:
			p = init.getPropertyValue(p)
			if not os.path.isabs(p): raise BuildException('Only absolute path properties can be used as output dirs: "%s"'%p)
			init.registerOutputDir(os.path.normpath(p))

def defineEnumerationProperty(name, default, enumValues):
	""" Defines a property that must take one of the specified values.

	@param name: The name of the property

	@param default: The default value of the property (can contain other ${...} variables)
	If set to None, the property must be set on the command line each time

	@param enumValues: A list of valid values for this property
	"""

	# Expands properties, then checks that it's one of the acceptable values
	def _coerceToValidValue(value):
		value = BuildInitializationContext.getBuildInitializationContext().expandPropertyValues(value)
		if value in enumValues: return value

		# case-insensitive match
		for e in enumValues:
			if e.lower()==value.lower():
				return e

		raise BuildException('Invalid property value for "%s" - value "%s" is not one of the allowed enumeration values: %s' % (name, value, enumValues))

	init = BuildInitializationContext.getBuildInitializationContext()
	if init:
		return init.defineProperty(name, default, coerceToValidValue=_coerceToValidValue)

def defineBooleanProperty(name, default=False):
	""" Defines a boolean property that will have a True or False value.

	@param name: The property name

	@param default: The default value (default = False)
	If set to None, the property must be set on the command line each time
	"""

	# Expands property values, then converts to a boolean
	def _coerceToValidValue(value):
		value = BuildInitializationContext.getBuildInitializationContext().expandPropertyValues(str(value))
		if value.lower() == 'true':
			return True
		if value.lower() == 'false' or value=='':
			return False
		raise BuildException('Invalid property value for "%s" - must be true or false' % (name))

	init = BuildInitializationContext.getBuildInitializationContext()
	if init:
		return init.defineProperty(name, default, coerceToValidValue=_coerceToValidValue)

def defineIntegerProperty(name, default):
	""" Defines a property that will have an int value.

	@param name: The property name

	@param default: The default value (an int, or a string that can contain other ${...} variables).
	If set to None, the property must be set on the command line each time
	"""
	def _coerceToValidValue(value):
		value = BuildInitializationContext.getBuildInitializationContext().expandPropertyValues(str(value)).strip()
		try:
			return int(value)
		except ValueError:
			raise BuildException('Invalid property value for "%s" - value "%s" must be an integer' % (name, value))

	init = BuildInitializationContext.getBuildInitializationContext()
	if init:
		return init.defineProperty(name, default, coerceToValidValue=_coerceToValidValue)

def defineListProperty(name, default):
	""" Defines a property whose value is a list of strings.

	String values (including overrides from the command line) are split on commas and/or whitespace,
	so ``A,B`` and ``A B`` both give ``['A', 'B']``. When used in ``${...}`` substitution the list
	is joined with commas.

	@param name: The property name

	@param default: The default value, either a list or a separated string (can contain other ${...} variables).
	If set to None, the property must be set on the command line each time
	"""
	def _coerceToValidValue(value):
		init = BuildInitializationContext.getBuildInitializationContext()
		if isinstance(value, str):
			return splitList(init.expandPropertyValues(value))
		return [init.expandPropertyValues(str(v)) for v in value]

	init = BuildInitializationContext.getBuildInitializationContext()
	if init:
		return init.defineProperty(name, default, coerceToValidValue=_coerceToValidValue)

def definePropertiesFromFile(propertiesFile, prefix=None, excludeLines=None, conditions=None):
	"""
	Defines a set of properties by reading a .properties file.

	Keys naming one of the standard product configuration properties are defined with their standard type (e.g.
	``PLATFORM_SDK_VERSION`` as an integer); all other keys become string properties.

	@param propertiesFile: The file to include properties from (can include ${...} variables). Relative paths are
	resolved against the directory of the current build file.

	@param prefix: if specified, this prefix will be added to the start of all property names from this file

	@param excludeLines: a string of list of strings to search for, any KEY containing these strings will be ignored

	@param conditions: An optional set or list of lower_case string conditions that can appear in property
	keys to dynamically filter based on the kind of build being performed, for example
	``TARGET_BUILD_VARIANT<debug>=eng``. Each such line is only included if every comma-separated
	condition it lists is one of the condition strings passed to this function.
	"""
	from buildinfo.productconfig import isStandardProperty, defineStandardProperty

	if conditions: assert not isinstance(conditions,str), 'conditions parameter must be a list'
	__log.info('Defining properties from file: %s', propertiesFile)
	context = BuildInitializationContext.getBuildInitializationContext()

	propertiesFile = context.getFullPath(propertiesFile, context.getCurrentBuildDir())
	try:
		f = open(propertiesFile, 'r', encoding='utf-8')
	except Exception as e:
		raise BuildException('Failed to open properties file "%s"'%(propertiesFile), causedBy=True)
	missingKeysFound = set()
	with f:
		for key,value,lineNo in parsePropertiesFile(f, excludeLines=excludeLines):
			__log.debug('definePropertiesFromFile: expanding %s=%s', key, value)
			location = '%s:%d'%(propertiesFile, lineNo)

			if '<' in key and conditions is not None:
				c = re.search('<([^>]+)>', key)
				if not c:
					raise BuildException('Error processing properties file, malformed <condition> line', location=location)
				key = key.replace('<'+c.group(1)+'>', '').strip()
				if '<' in key: raise BuildException('Error processing properties file, malformed line with multiple <condition> items', location=location)

				matches = True
				for cond in c.group(1).split(','):
					if cond.strip() not in conditions:
						matches = False
						break
				if not matches:
					__log.debug('definePropertiesFromFile ignoring line that does not match condition: %s'%key)
					missingKeysFound.add(key)
					continue
				else:
					missingKeysFound.discard(key)

			if prefix: key = prefix+key

			try:
				value = context.expandPropertyValues(value)
				if isStandardProperty(key):
					defineStandardProperty(key, value)
				else:
					context.defineProperty(key, value, debug=True)
			except BuildException as e:
				raise BuildException('Error processing properties file', location=location, causedBy=True)

	# ensure the same set of properties is always defined regardless of conditions
	for k in missingKeysFound:
		try:
			context.getPropertyValue(k)
		except BuildException as e:
			raise BuildException('Error processing properties file %s: no property key found for "%s" matched any of the conditions: %s'%(
				propertiesFile, k, conditions))

def getPropertyValue(propertyName) -> object:
	""" Return the current value of the given property (can only be used during build file parsing).

	Where possible, defer property resolution until the build phase and use
	`buildinfo.buildcontext.BuildContext.getPropertyValue` instead.
	"""
	context = BuildInitializationContext.getBuildInitializationContext()
	assert context, 'getPropertyValue can only be used during build file initialization phase'
	return context.getPropertyValue(propertyName)

def enableEnvironmentPropertyOverrides(prefix):
	"""
	Turns on support for value overrides for defined properties from the
	environment as well as from the command line.

	This setting only affects properties defined after the point in the
	build files where it is called.

	Property values specified on the command line take precedence over env
	vars, which in turn take precedence over the defaults specified when
	properties are defined.

	@param prefix: The prefix added to the start of a build property name to form
	the name of the environment variable, e.g. ``BUILDINFO_``. This is mandatory (cannot be
	empty) so that build properties are never accidentally overridden by unrelated variables.
	"""
	init = BuildInitializationContext.getBuildInitializationContext()
	if init:
		init.enableEnvironmentPropertyOverrides(prefix)

def boolDefault(value, default: bool) -> bool:
	""" Resolves a tri-state boolean value, where None means "not specified".

	Strings are accepted too, since option values may come from properties.

	>>> boolDefault(None, True)
	True
	>>> boolDefault(False, True)
	False
	>>> boolDefault('true', False)
	True
	>>> boolDefault('', True)
	True
	>>> boolDefault('maybe', True)
	Traceback (most recent call last):
	...
	buildinfo.utils.buildexceptions.BuildException: Invalid boolean value "maybe" - must be true or false
	"""
	if value is None: return default
	if isinstance(value, bool): return value
	if isinstance(value, str):
		if value.strip() == '': return default
		if value.strip().lower() == 'true': return True
		if value.strip().lower() == 'false': return False
	raise BuildException('Invalid boolean value "%s" - must be true or false'%value)

################################################################################
# Options

def defineOption(name, default):
	""" Define an option with a default (can be overridden globally using setGlobalOption() or on individual modules).

	This method is typically used only when implementing a new kind of module.

	@param name: The option name, which should usually be in lowerCamelCase, with
	a TitleCase prefix specific to this module type, e.g. ``BuildInfoProp.installable``.

	@param default: The default value of the option.
	"""
	BuildInitializationContext._defineOption(name, default)

def setGlobalOption(key, value):
	"""
		Globally override the default for an option
	"""
	init = BuildInitializationContext.getBuildInitializationContext()
	if init:
		init.setGlobalOption(key, value)
