# buildinfo - build-time properties file generator
#
# Defines the classes used to hold build context during the initialization and
# build stages
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
Contains `BuildInitializationContext`, which holds the mutable state of the build while the build file is being
loaded, and `BuildContext`, the immutable configuration snapshot that is passed to modules when they generate
their build actions.
"""

import sys, os, time, traceback, types, io
import re

from buildinfo.utils.buildexceptions import BuildException
from buildinfo.utils.fileutils import isDirPath
from buildinfo.utils.flatten import getStringList

import logging
log = logging.getLogger('buildinfo')

class BaseContext(object):
	""" Common functionality needed during initialization and build phases.
	"""

	def __init__(self, initialProperties=None):
		"""
		@param initialProperties: a dictionary of initial property values;
		used by doc tests.
		"""
		self._properties = dict(initialProperties or {})
		self._globalOptions = {}

	def getPropertyValue(self, name):
		""" Get the value of the specified property or raise a BuildException if it doesn't exist.

		@param name: the property name (without ${...}) to retrieve. Must be a string.

		@return: For Boolean properties this will be a python Boolean, for integer properties an int,
		for list properties a list of strings, for everything else a string.

		>>> BaseContext({'A':'b','TARGET_BUILD_VARIANT':'eng'}).getPropertyValue('TARGET_BUILD_VARIANT')
		'eng'
		>>> BaseContext({'A':False}).getPropertyValue('A')
		False
		>>> BaseContext({'A':'b'}).getPropertyValue('UNDEFINED_PROPERTY')
		Traceback (most recent call last):
		...
		buildinfo.utils.buildexceptions.BuildException: Property "UNDEFINED_PROPERTY" is not defined
		"""
		result = self._properties.get(name)
		if result is None:
			raise BuildException('Property "%s" is not defined'%name)
		return result

	@staticmethod
	def _stringifyValue(value):
		if isinstance(value, bool): return 'true' if value else 'false'
		if isinstance(value, (list, tuple)): return ','.join(value)
		return str(value)

	def expandPropertyValues(self, string):
		""" Expand all ${PROP_NAME} properties in the specified string.

		Use a double dollar to escape if needed, e.g. "$${foo}" will end up as
		"${foo}" unescaped. This assumes expandPropertyValues is not called
		more than once on the same string (it is not idempotent).

		Boolean values are expanded to "true" or "false", and list values are joined with commas.

		Returns the expanded string, or raises BuildException if expansion fails.

		>>> BaseContext({'OUTPUT_DIR':'/out'}).expandPropertyValues('${OUTPUT_DIR}/intermediates')
		'/out/intermediates'
		>>> BaseContext({'KATI_ENABLED':True, 'C':['A', 'B']}).expandPropertyValues('kati=${KATI_ENABLED} codenames=${C}')
		'kati=true codenames=A,B'
		>>> BaseContext({'A':'b'}).expandPropertyValues('$${A} is ${A}')
		'${A} is b'
		>>> BaseContext({}).expandPropertyValues('${NOPE}')
		Traceback (most recent call last):
		...
		buildinfo.utils.buildexceptions.BuildException: Property "NOPE" is not defined
		"""
		if string is None or not isinstance(string, str): return string
		if '$' not in string: return string

		result = re.sub(r'(?<!\$)\$\{([^}]*)\}', lambda m: self._stringifyValue(self.getPropertyValue(m.group(1))), string)
		return result.replace('$${', '${')

	def getProperties(self):
		""" Return a new copy of the properties dictionary (values may be of any type). """
		return dict(self._properties)

	def getFullPath(self, path, defaultDir):
		""" Expands properties in the specified path, makes it absolute (relative to defaultDir if needed) and
		normalizes it, preserving any trailing slash.

		>>> BaseContext({'D':'/b'}).getFullPath('${D}/c', '/a').replace(os.sep, '/')
		'/b/c'
		>>> BaseContext({}).getFullPath('c/d/', '/a').replace(os.sep, '/')
		'/a/c/d/'
		"""
		path = self.expandPropertyValues(path)
		isdir = isDirPath(path)
		if not os.path.isabs(path):
			path = os.path.join(self.expandPropertyValues(defaultDir), path)
		path = os.path.normpath(path)
		if isdir: path += os.sep
		return path

	def getGlobalOption(self, key):
		""" Get the global value of the specified option (ignoring any per-module overrides). """
		if key not in self._globalOptions: raise BuildException('Unknown option "%s"'%key)
		return self._globalOptions[key]

	def _mergeListOfOptionDicts(self, dicts, module=None):
		# creates a new dictionary from a list of option dictionaries, later ones taking precedence;
		# string values get property expansion, and every key must have been defined with defineOption
		result = {}
		for d in dicts:
			for (k, v) in d.items():
				if k not in BuildInitializationContext._definedOptions:
					raise BuildException('Unknown option "%s"%s'%(k, ' for module %s'%module if module else ''))
				result[k] = self.expandPropertyValues(v) if isinstance(v, str) else v
		return result

	def mergeOptions(self, module=None):
		""" Returns a new dictionary of the resolved options, including per-module overrides if a module is specified.
		"""
		if module is None:
			return dict(self._globalOptions)
		return self._mergeListOfOptionDicts([self._globalOptions, module._getOptionOverrides()], module=module)

class BuildInitializationContext(BaseContext):
	"""
	Provides context used only during the initialization phase of the build, including the ability to define
	property values that will later become immutable.

	This is the class returned by L{getBuildInitializationContext}.
	"""

	# hold option definitions in this static field, since options are defined by module classes at import time
	_definedOptions = {}

	__buildInitializationContext = None

	def __init__(self, propertyOverrides):
		""" Creates a new BuildInitializationContext object.

		@param propertyOverrides: property override values specified by the user on the command line; all values must be
		of type string.
		"""
		BaseContext.__init__(self)

		self._propertyOverrides = dict(propertyOverrides)
		self._envPropertyOverrides = {}
		self._envPropertyPrefixes = []

		self._modulesMap = {} # name:module object
		self._modulesList = []
		self._outputDirs = set()
		self._initializationCompleted = False
		self._currentBuildFile = []
		self._rootDir = os.getcwd()
		self._buildFile = None

	@staticmethod
	def getBuildInitializationContext():
		"""Returns the singleton `BuildInitializationContext` instance during parsing of build files,
		or None if there isn't one (e.g. when running doc tests).

		It is an error to call this method after parsing of build files has completed,
		since a `BuildContext` is used for that phase of the build instead.
		"""
		assert BuildInitializationContext.__buildInitializationContext != 'build phase', 'cannot use this method once the build has started, use context argument instead'
		return BuildInitializationContext.__buildInitializationContext

	def getCurrentBuildDir(self):
		""" Returns the directory containing the build file currently being parsed, or the root directory of the
		build if no build file is being parsed. """
		if self._currentBuildFile: return os.path.dirname(self._currentBuildFile[-1])
		return self._rootDir

	def initializeFromBuildFile(self, buildFile):
		""" Load the specified build file, which is the initialization phase during which properties are defined and
		the module definitions in the build file register themselves with this object.

		Any standard product configuration property that the build file did not define is then defined with its
		default value, and if no module was declared a default `BuildInfoProp` module is created.

		@param buildFile: The path to the build file to load, or None to load no build file at all (in which case
		all configuration comes from the command line and the defaults).
		"""
		startTime = time.time()
		BuildInitializationContext.__buildInitializationContext = self
		try:
			if buildFile:
				if os.path.isdir(buildFile): buildFile = os.path.join(buildFile, 'root.buildinfo.py')
				buildFile = os.path.abspath(buildFile)
				if not os.path.isfile(buildFile): raise BuildException('Cannot find build file: %s'%buildFile)
				self._buildFile = buildFile
				self._rootDir = os.path.dirname(buildFile)
				log.debug("Loading build file %s ...", buildFile)
				self._loadBuildFile(buildFile)
			else:
				log.info('No build file specified; using default module definitions')

			# Ensure all product configuration properties have been defined
			from buildinfo.productconfig import STANDARD_PROPERTY_NAMES
			for p in STANDARD_PROPERTY_NAMES:
				self.getPropertyValue(p)

			if not self._modulesList:
				from buildinfo.modules.buildinfoprop import BuildInfoProp
				BuildInfoProp('buildinfo.prop')
		finally:
			BuildInitializationContext.__buildInitializationContext = 'build phase'
		self._initializationCompleted = True

		log.info('Loaded build configuration in %0.1f seconds', (time.time()-startTime))

		# all the valid ones will have been popped already
		if self._propertyOverrides:
			raise BuildException('Cannot specify value for undefined build property/properties: %s'%(', '.join(sorted(self._propertyOverrides.keys()))))

		self._finalizeGlobalOptions()

	def _loadBuildFile(self, buildFile):
		self._currentBuildFile = [buildFile]
		try:
			with io.open(buildFile, "rb") as f:
				exec(compile(f.read(), buildFile, 'exec'), {'__file__':buildFile, '__name__':'__buildfile__'})
		except BuildException as e:
			log.error('Failed to load build file: %s', e.toSingleLineString(None))
			log.debug('Failed to load build file: %s', traceback.format_exc())
			raise
		except SyntaxError as e:
			log.exception('Failed to load build file: ')
			# wrap in buildexception to avoid printing same stack trace twice
			raise BuildException('Failed to load build file', location='%s:%s'%(e.filename, e.lineno), causedBy=True)
		finally:
			self._currentBuildFile = []

	def _finalizeGlobalOptions(self): # internal method called at end of build initialization phase
		# use this proxy to make it unmodifiable so we can pass it around
		self._globalOptions = types.MappingProxyType(self._mergeListOfOptionDicts([
			BuildInitializationContext._definedOptions, self._globalOptions]))

	def _initializationCheck(self):
		if self._initializationCompleted: raise Exception('Cannot invoke this method now that the initialization phase is over')

	def getPropertyValue(self, name):
		""" Get the value of the specified property, defining it with its default value first if it is one of the
		standard product configuration properties and has not yet been defined. """
		result = self._properties.get(name)
		if result is None and not self._initializationCompleted:
			from buildinfo.productconfig import isStandardProperty, defineStandardProperty
			if isStandardProperty(name):
				defineStandardProperty(name)
				result = self._properties.get(name)
				assert result is not None, name
		if result is None:
			raise BuildException('Property "%s" is not defined'%name)
		return result

	def enableEnvironmentPropertyOverrides(self, prefix):
		if not prefix or not prefix.strip():
			raise BuildException('It is mandatory to specify a prefix for enableEnvironmentPropertyOverrides')
		if prefix in self._envPropertyPrefixes: return
		self._envPropertyPrefixes.append(prefix)

		# read from env now to save doing it repeatedly later
		for k in os.environ:
			if k.startswith(prefix):
				v = os.environ[k]
				k = k[len(prefix):]
				if k in self._envPropertyOverrides:
					raise BuildException('Property %s is being read in from the environment in two different ways'%(prefix+k))
				self._envPropertyOverrides[k] = v

	def defineProperty(self, name, default, coerceToValidValue=None, debug=False):
		""" Defines a user-settable property, specifying a default value and
		an optional method to validate values specified by the user.
		Return the value assigned to the property.

		Build files should not use this directly, but instead call L{propertysupport.defineStringProperty}
		et al. Will raise an exception if called after the build files have been parsed.

		@param name: must be UPPER_CASE
		@param default: No substitution is performed on this value.
		If set to None, the property must be set on the command line each time
		@param coerceToValidValue: None, or a function to validate and/or convert the input string to a value of the right
		type
		@param debug: if True log at DEBUG else log at INFO
		"""
		self._initializationCheck()

		# enforce naming convention
		if name.upper() != name:
			raise BuildException('Invalid property name "%s" - all property names must be upper case'%name)

		if name in self._properties:
			raise BuildException('Cannot set the value of property "%s" more than once'%name)

		value = self._propertyOverrides.get(name)
		if value is None and name in self._envPropertyOverrides:
			value = self._envPropertyOverrides.get(name)
			log.critical('Overriding property value from environment: %s=%s', name, value)
		if value is None: value = default

		if value is None:
			raise BuildException('Property "%s" must be set on the command line' % name)

		# NB: from this point onwards value may NOT be a string (e.g. could be a boolean)
		if coerceToValidValue:
			value = coerceToValidValue(value)

		self._properties[name] = value

		# remove if still present, so we can tell if user tries to set any undefined properties
		self._propertyOverrides.pop(name, None)

		if debug:
			log.debug('Setting property %s=%s', name, value)
		else:
			log.info('Setting property %s=%s', name, value)

		return value

	def _hasOverride(self, name):
		return name in self._propertyOverrides or name in self._envPropertyOverrides

	def registerOutputDir(self, outputDir):
		""" Registers that the specified directory should be created before the build starts, and deleted during
		a clean. """
		self._initializationCheck()
		self._outputDirs.add(os.path.normpath(outputDir))

	def getOutputDirs(self):
		""" Returns the registered output directories. """
		return sorted(self._outputDirs)

	def registerModule(self, module):
		""" Registers the module with this context.

		Raises a BuildException if a module with the same name already exists, or if the module is a singleton
		and another module of the same type has already been registered.
		"""
		self._initializationCheck()
		if module.name in self._modulesMap:
			raise BuildException('Duplicate module name "%s"'%module.name)
		if getattr(module, 'singleton', False):
			for m in self._modulesList:
				if isinstance(m, type(module)) or isinstance(module, type(m)):
					raise BuildException('Only one %s module can be defined per build, but found "%s" and "%s"'%(module.type, m.name, module.name))
		self._modulesMap[module.name] = module
		self._modulesList.append(module)

	def modules(self):
		""" Returns the list of registered modules, in definition order. """
		return list(self._modulesList)

	def getModule(self, name):
		""" Returns the module with the specified name, or raises a BuildException. """
		if name not in self._modulesMap: raise BuildException('Unknown module: %s'%name)
		return self._modulesMap[name]

	@staticmethod
	def _defineOption(name, default):
		if name in BuildInitializationContext._definedOptions:
			raise BuildException('Cannot define option "%s" more than once'%name)
		BuildInitializationContext._definedOptions[name] = default

	def setGlobalOption(self, key, value):
		""" Sets the value of an option for every module in the build (unless overridden per module). """
		self._initializationCheck()
		if key not in self._definedOptions:
			raise BuildException('Cannot set value of undefined option "%s"'%key)
		self._globalOptions[key] = value

	def createBuildContext(self):
		""" Returns the immutable `BuildContext` snapshot for the build phase. """
		assert self._initializationCompleted, 'Cannot create the build context until initialization is complete'
		return BuildContext(self._properties, self._globalOptions, self.getOutputDirs())

getBuildInitializationContext = BuildInitializationContext.getBuildInitializationContext

class BuildContext(BaseContext):
	"""
	The immutable snapshot of build configuration that is passed to modules during the build phase.

	Holds the property values (in a read-only mapping) and provides typed accessors for the
	product configuration used by modules. The snapshot is never modified after construction.

	>>> ctx = BuildContext({'PLATFORM_SDK_VERSION':34, 'TARGET_BUILD_VARIANT':'eng', 'PLATFORM_VERSION_ACTIVE_CODENAMES':['VanillaIceCream']})
	>>> ctx.platformSdkVersion()
	34
	>>> ctx.eng()
	True
	>>> ctx.platformVersionActiveCodenames()
	['VanillaIceCream']
	>>> ctx.foo = 'bar'
	Traceback (most recent call last):
	...
	AttributeError: BuildContext is immutable; cannot set "foo"
	"""

	def __init__(self, properties, globalOptions=None, outputDirs=None):
		BaseContext.__init__(self)
		self._properties = types.MappingProxyType(dict(properties))
		self._globalOptions = types.MappingProxyType(dict(globalOptions or {}))
		self._outputDirs = tuple(outputDirs or [])
		self.__frozen = True

	def __setattr__(self, name, value):
		if getattr(self, '_BuildContext__frozen', False):
			raise AttributeError('BuildContext is immutable; cannot set "%s"'%name)
		object.__setattr__(self, name, value)

	def getOutputDirs(self):
		return list(self._outputDirs)

	# Product configuration accessors

	def platformSdkVersion(self) -> int:
		return self.getPropertyValue('PLATFORM_SDK_VERSION')

	def platformPreviewSdkVersion(self) -> str:
		return self._properties.get('PLATFORM_PREVIEW_SDK_VERSION', '')

	def platformSdkCodename(self) -> str:
		return self.getPropertyValue('PLATFORM_VERSION_CODENAME')

	def platformVersionActiveCodenames(self) -> list:
		return list(getStringList(self._properties.get('PLATFORM_VERSION_ACTIVE_CODENAMES', [])))

	def platformVersionLastStable(self) -> str:
		return self.getPropertyValue('PLATFORM_VERSION_LAST_STABLE')

	def platformVersionName(self) -> str:
		""" The release version, or the codename for a pre-release platform. """
		return self.getPropertyValue('PLATFORM_VERSION')

	def platformSecurityPatch(self) -> str:
		return self.getPropertyValue('PLATFORM_SECURITY_PATCH')

	def platformBaseOS(self) -> str:
		return self._properties.get('PLATFORM_BASE_OS', '')

	def platformMinSupportedTargetSdkVersion(self) -> str:
		return self.getPropertyValue('PLATFORM_MIN_SUPPORTED_TARGET_SDK_VERSION')

	def buildVariant(self) -> str:
		return self._properties.get('TARGET_BUILD_VARIANT', 'user')

	def eng(self) -> bool:
		""" True if this is an engineering build. """
		return self.buildVariant() == 'eng'

	def katiEnabled(self) -> bool:
		""" True if the command-based build action backend is enabled. """
		return self._properties.get('KATI_ENABLED', True) is True
