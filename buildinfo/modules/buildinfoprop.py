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
Contains `buildinfo.modules.buildinfoprop.BuildInfoProp`, the module that generates the ``buildinfo.prop`` file
describing the platform version and build type of an image build.

The file is a flat list of ``key=value`` lines in a fixed order, framed by comment lines::

	# begin build properties
	# autogenerated by buildinfo/modules/buildinfoprop.py
	ro.build.version.sdk=34
	...
	ro.build.type=user
	# end build properties

Typical build file usage::

	from buildinfo.propertysupport import *
	from buildinfo.modules.buildinfoprop import BuildInfoProp

	definePropertiesFromFile('product.properties')
	BuildInfoProp('buildinfo.prop')

To build the file without copying it into the image install directory, use::

	BuildInfoProp('buildinfo.prop').option('BuildInfoProp.installable', False)

"""

import os
import logging

from buildinfo.basemodule import BaseModule
from buildinfo.propertysupport import defineOption, boolDefault
from buildinfo.rulebuilder import Command, RuleBuilder, writeFileRule
from buildinfo.makeentries import MakeEntries
from buildinfo.utils.buildexceptions import BuildException

log = logging.getLogger('buildinfoprop')

defineOption('BuildInfoProp.installable', None)

KATI_DISABLED_PLACEHOLDER = '# no buildinfo.prop if kati is disabled'

class InvalidPropertyKeyError(Exception):
	""" Raised when a property key is malformed or repeated, or a comment line does not start with ``#``. This
	indicates an error in the module's key table rather than in the build configuration. """
	pass

class PropertySpec(object):
	""" The ordered list of properties and comment lines that make up a generated properties file.

	>>> spec = PropertySpec()
	>>> spec.comment('# begin')
	>>> spec.prop('ro.build.type', 'user')
	>>> spec.prop('ro.build.version.base_os', '')
	>>> spec.lines()
	['# begin', 'ro.build.type=user', 'ro.build.version.base_os=']
	>>> spec.keys()
	['ro.build.type', 'ro.build.version.base_os']

	Keys must never contain ``=`` and must not be repeated:

	>>> spec.prop('ro.build=type', 'user')
	Traceback (most recent call last):
	...
	buildinfo.modules.buildinfoprop.InvalidPropertyKeyError: wrong property key "ro.build=type": key must not contain '='
	>>> spec.prop('ro.build.type', 'eng')
	Traceback (most recent call last):
	...
	buildinfo.modules.buildinfoprop.InvalidPropertyKeyError: wrong property key "ro.build.type": key must not be emitted more than once

	Comment lines must start with ``#`` so they are never read back as a property:

	>>> spec.comment('ro.build.type=eng')
	Traceback (most recent call last):
	...
	buildinfo.modules.buildinfoprop.InvalidPropertyKeyError: wrong comment "ro.build.type=eng": comment must start with '#'
	>>> spec.lines()
	['# begin', 'ro.build.type=user', 'ro.build.version.base_os=']
	"""
	def __init__(self):
		self.__entries = [] # (key, value) for properties, (None, text) for comments
		self.__keys = set()

	def comment(self, text):
		""" Appends a comment line, which is emitted as-is. """
		if not text.startswith('#'):
			raise InvalidPropertyKeyError('wrong comment "%s": comment must start with \'#\''%text)
		self.__entries.append((None, text))

	def prop(self, key, value):
		""" Appends a key=value property line. The value is inserted verbatim. """
		if not key:
			raise InvalidPropertyKeyError('wrong property key "%s": key must not be empty'%key)
		if '=' in key:
			raise InvalidPropertyKeyError('wrong property key "%s": key must not contain \'=\''%key)
		if key in self.__keys:
			raise InvalidPropertyKeyError('wrong property key "%s": key must not be emitted more than once'%key)
		self.__keys.add(key)
		self.__entries.append((key, value))

	def entries(self):
		""" Returns a list of (key, value) tuples, where key is None for comment lines. """
		return list(self.__entries)

	def keys(self):
		return [k for (k, v) in self.__entries if k is not None]

	def lines(self):
		""" Returns each entry as the line of text it is rendered as (without line endings). """
		return [v if k is None else '%s=%s'%(k, v) for (k, v) in self.__entries]

def _quoteForShell(line):
	""" Escape a line for use inside a double-quoted shell string.

	>>> print(_quoteForShell('a=$HOME "x" `y`'))
	"a=\\$HOME \\"x\\" \\`y\\`"
	"""
	return '"%s"'%(line.replace('\\', '\\\\').replace('"', '\\"').replace('$', '\\$').replace('`', '\\`'))

class BuildInfoProp(BaseModule):
	"""
	Generates the ``buildinfo.prop`` file containing the platform version (``ro.build.version.*``) and build type
	(``ro.build.type``) properties for the current product configuration, and installs it into the system
	directory of the image.

	At most one ``BuildInfoProp`` may be declared per build.

	The file is written by a shell command action (``( printf '%s\\n' "..." && ... true) > file``). If the ``KATI_ENABLED``
	property is false, a placeholder file containing a single comment line is written instead.

	Options:

		- ``BuildInfoProp.installable``: True, False or None (the default, which means True). If False, the file
		  is still generated and reported by `outputFiles`, but is not installed into the image.
	"""

	singleton = True

	INSTALL = 'install'
	SKIP = 'skip'

	GENERATOR_IDENTITY = 'buildinfo/modules/buildinfoprop.py'

	VERSION_PROPERTIES = [
		('ro.build.version.sdk', 'platformSdkVersion'),
		('ro.build.version.preview_sdk', 'platformPreviewSdkVersion'),
		('ro.build.version.codename', 'platformSdkCodename'),
		('ro.build.version.all_codenames', 'platformVersionActiveCodenames'),
		('ro.build.version.release', 'platformVersionLastStable'),
		('ro.build.version.release_or_codename', 'platformVersionName'),
		('ro.build.version.security_patch', 'platformSecurityPatch'),
		('ro.build.version.base_os', 'platformBaseOS'),
		('ro.build.version.min_supported_target_sdk', 'platformMinSupportedTargetSdkVersion'),
	]
	""" The version properties in the order they are written, each with the name of the
	`buildinfo.buildcontext.BuildContext` accessor that provides the value. """

	def __init__(self, name='buildinfo.prop'):
		"""
		@param name: The module name, which is also the file name of the generated file.
		"""
		BaseModule.__init__(self, name)
		self.__outputPath = None
		self.__installPath = None
		self.__installable = None

	def generate(self, config):
		""" Derives the ordered properties for the specified configuration.

		The result depends only on the configuration, so identical configurations always give identical output.

		>>> from buildinfo.buildcontext import BuildContext
		>>> config = BuildContext({'PLATFORM_SDK_VERSION':34, 'PLATFORM_PREVIEW_SDK_VERSION':'0',
		...   'PLATFORM_VERSION_CODENAME':'REL', 'PLATFORM_VERSION_ACTIVE_CODENAMES':['REL'],
		...   'PLATFORM_VERSION_LAST_STABLE':'14', 'PLATFORM_VERSION':'14', 'PLATFORM_SECURITY_PATCH':'2024-01-01',
		...   'PLATFORM_BASE_OS':'', 'PLATFORM_MIN_SUPPORTED_TARGET_SDK_VERSION':'23', 'TARGET_BUILD_VARIANT':'user'})
		>>> print(BuildInfoProp.render(BuildInfoProp().generate(config)), end='')
		# begin build properties
		# autogenerated by buildinfo/modules/buildinfoprop.py
		ro.build.version.sdk=34
		ro.build.version.preview_sdk=0
		ro.build.version.codename=REL
		ro.build.version.all_codenames=REL
		ro.build.version.release=14
		ro.build.version.release_or_codename=14
		ro.build.version.security_patch=2024-01-01
		ro.build.version.base_os=
		ro.build.version.min_supported_target_sdk=23
		ro.build.type=user
		# end build properties

		@param config: the `buildinfo.buildcontext.BuildContext`, which is not modified.
		@return: a new `PropertySpec`.
		@raise InvalidPropertyKeyError: if the key table contains a malformed or duplicate key.
		"""
		spec = PropertySpec()
		spec.comment('# begin build properties')
		spec.comment('# autogenerated by %s'%self.GENERATOR_IDENTITY)

		for (key, accessor) in self.VERSION_PROPERTIES:
			value = getattr(config, accessor)()
			if isinstance(value, (list, tuple)):
				value = ','.join(value)
			spec.prop(key, str(value))

		spec.prop('ro.build.type', 'eng' if config.eng() else 'user')

		spec.comment('# end build properties')
		return spec

	@staticmethod
	def render(spec, katiEnabled=True):
		""" Returns the text of the properties file, one line per entry, each ending with a newline.

		If katiEnabled is False the spec argument is ignored and a placeholder is returned instead:

		>>> BuildInfoProp.render(None, katiEnabled=False)
		'# no buildinfo.prop if kati is disabled\\n'
		"""
		if not katiEnabled:
			return KATI_DISABLED_PLACEHOLDER+'\n'
		return ''.join(l+'\n' for l in spec.lines())

	@staticmethod
	def _emitCommand(cmd, spec, outputPath):
		cmd.text('(')
		for l in spec.lines():
			cmd.text("printf '%%s\\n' %s &&"%_quoteForShell(l))
		cmd.text('true) >').output(outputPath)
		return cmd

	@staticmethod
	def renderCommand(spec, outputPath):
		""" Returns the shell command that writes the rendered spec to outputPath.

		>>> spec = PropertySpec()
		>>> spec.comment('# begin build properties')
		>>> spec.prop('ro.build.type', 'user')
		>>> print(BuildInfoProp.renderCommand(spec, '/out/buildinfo.prop'))
		( printf '%s\\n' "# begin build properties" && printf '%s\\n' "ro.build.type=user" && true) > /out/buildinfo.prop

		Each line is passed to ``printf`` as an argument, so backslashes in values are written through unchanged:

		>>> spec.prop('ro.build.version.base_os', 'a\\\\nb')
		>>> print(BuildInfoProp.renderCommand(spec, '/out/buildinfo.prop'))
		( printf '%s\\n' "# begin build properties" && printf '%s\\n' "ro.build.type=user" && printf '%s\\n' "ro.build.version.base_os=a\\\\nb" && true) > /out/buildinfo.prop
		"""
		return BuildInfoProp._emitCommand(Command(), spec, outputPath).toString()

	def installable(self) -> bool:
		""" The resolved value of the ``BuildInfoProp.installable`` option. Only available once build actions are
		being generated. """
		if self.__installable is None:
			self.__installable = boolDefault(self.getOption('BuildInfoProp.installable', errorIfNone=False), True)
		return self.__installable

	def installDecision(self):
		""" Returns `INSTALL` unless the module has been configured as not installable, in which case `SKIP`. """
		return BuildInfoProp.INSTALL if self.installable() else BuildInfoProp.SKIP

	def generateBuildActions(self, ctx):
		self.__outputPath = ctx.pathForModuleOut(self.name)
		config = ctx.config()

		if not config.katiEnabled():
			self.log.info('Kati is disabled; writing placeholder %s', self.__outputPath)
			writeFileRule(ctx, self.__outputPath, self.render(None, katiEnabled=False))
			self.skipInstall()
		else:
			spec = self.generate(config)
			self.log.debug('Generated %d properties for %s', len(spec.keys()), self)

			rule = RuleBuilder(ctx)
			self._emitCommand(rule.command(), spec, self.__outputPath)
			rule.build('build.prop', 'generating build.prop')

			if not self.installable():
				self.skipInstall()

		# registered even when skipped, so that a copy installed by a previous build is removed
		self.__installPath = ctx.pathForModuleInstall()
		ctx.installFile(self.__installPath, self.name, self.__outputPath)

	def preview(self, config):
		""" Returns the text the generated file will contain for the specified configuration. """
		if not config.katiEnabled(): return self.render(None, katiEnabled=False)
		return self.render(self.generate(config))

	def outputFiles(self, tag):
		""" Returns the generated file for the default tag ``''``; any other tag is an error. """
		if tag != '':
			raise BuildException('unsupported tag "%s"'%tag)
		if self.__outputPath is None:
			raise Exception('Output files of %s are not available until its build actions have been generated'%self)
		return [self.__outputPath]

	def makeEntries(self):
		return [MakeEntries('ETC', outputFile=self.__outputPath, extraEntries=[self.__extraMakeEntries])]

	def __extraMakeEntries(self, entries):
		entries.setString('LOCAL_MODULE_PATH', self.__installPath or '')
		entries.setString('LOCAL_INSTALLED_MODULE_STEM', os.path.basename(self.__outputPath))
		entries.setBoolIfTrue('LOCAL_UNINSTALLABLE_MODULE', self.isInstallSkipped())
