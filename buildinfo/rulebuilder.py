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
Support for constructing the build actions that modules register with their
`buildinfo.modulecontext.ModuleContext`.

A `RuleBuilder` assembles one or more shell `Command` lines into a `CommandAction`, which the executor later runs
with a POSIX shell::

	rule = RuleBuilder(ctx)
	rule.command().text('( echo "hello" && true) >').output(path)
	rule.build('hello', 'generating hello')

For content that is already known when actions are generated, `writeFileRule` registers a `WriteFileAction`
instead, which does not need a shell.
"""

import os
import shlex
import logging

from buildinfo.propertysupport import defineOption
from buildinfo.utils.buildexceptions import BuildException
from buildinfo.utils.fileutils import openForWrite, mkdir, deleteFile, readFileIfExists
from buildinfo.utils.outputhandler import ProcessOutputHandler
from buildinfo.utils import process

log = logging.getLogger('rulebuilder')

defineOption('process.timeout', 600)
defineOption('RuleBuilder.shell', 'sh')

class Command(object):
	""" A single shell command line, built up from verbatim text and output paths.

	>>> c = Command()
	>>> print(c.text('( echo "a=b" &&').text('true) >').output('/out/dir/my file').toString())
	( echo "a=b" && true) > '/out/dir/my file'
	>>> c.getOutputs()
	['/out/dir/my file']
	"""
	def __init__(self):
		self.__parts = []
		self.__outputs = []

	def text(self, text):
		""" Appends verbatim text to the command line, separated from the previous part by a space. """
		self.__parts.append(text)
		return self

	def output(self, path):
		""" Appends the path of a file written by this command (quoted for the shell), and records it as an output. """
		self.__parts.append(shlex.quote(path))
		self.__outputs.append(path)
		return self

	def getOutputs(self):
		return list(self.__outputs)

	def toString(self):
		return ' '.join(self.__parts)

	def __str__(self): return self.toString()

class RuleBuilder(object):
	""" Assembles shell commands into a `CommandAction` registered with a module context.

	@param ctx: the `buildinfo.modulecontext.ModuleContext` the action will be registered with.
	"""
	def __init__(self, ctx):
		self.__ctx = ctx
		self.__commands = []

	def command(self):
		""" Adds and returns a new `Command`. Commands in a rule run one after another, stopping at the first failure. """
		c = Command()
		self.__commands.append(c)
		return c

	def build(self, name, description):
		""" Registers a `CommandAction` built from the commands added so far, and returns it.

		This only registers the action; it is executed later by the executor.
		"""
		if not self.__commands:
			raise BuildException('Cannot build rule "%s" with no commands'%name)
		outputs = []
		for c in self.__commands:
			outputs.extend(c.getOutputs())
		action = CommandAction(name, description, ' && '.join(c.toString() for c in self.__commands), outputs)
		return self.__ctx.addAction(action)

class BaseAction(object):
	""" Base class for actions registered by modules and run by the executor.

	:ivar module: the module that registered this action, assigned on registration.
	"""
	def __init__(self, name, description, outputs):
		self.name = name
		self.description = description
		self.outputs = list(outputs)
		self.module = None

	def __str__(self):
		return '%s (%s)'%(self.description, self.name)

	def run(self, options):
		""" Perform the action.

		@param options: the resolved options of the module that registered this action.
		"""
		raise NotImplementedError('Not implemented by %s'%self.__class__.__name__)

	def clean(self):
		""" Delete the outputs of this action. """
		for o in self.outputs:
			log.info('Deleting output of %s: %s', self.name, o)
			deleteFile(o)

	def describe(self):
		""" Returns a description of what run would do, for dry-run mode. """
		return str(self)

class CommandAction(BaseAction):
	""" An action that runs a command line using the shell configured by the ``RuleBuilder.shell`` option. """
	def __init__(self, name, description, commandLine, outputs):
		BaseAction.__init__(self, name, description, outputs)
		self.commandLine = commandLine

	def describe(self):
		return '%s: %s'%(self, self.commandLine)

	def run(self, options):
		for o in self.outputs:
			mkdir(os.path.dirname(o))
		success = False
		try:
			process.call([options.get('RuleBuilder.shell', 'sh'), '-c', self.commandLine],
				outputHandler=ProcessOutputHandler(self.name, options=options),
				displayName=self.description, options=options)
			success = True
		finally:
			if not success:
				# no partial outputs
				for o in self.outputs:
					deleteFile(o, allowRetry=False)

class WriteFileAction(BaseAction):
	""" An action that writes known text content to a file (as UTF-8), leaving the file untouched if it already has
	exactly that content. """
	def __init__(self, name, description, path, content):
		BaseAction.__init__(self, name, description, [path])
		self.path = path
		self.content = content

	def describe(self):
		return '%s: write %d characters to %s'%(self, len(self.content), self.path)

	def run(self, options):
		if readFileIfExists(self.path) == self.content:
			log.info('Output is already up to date: %s', self.path)
			return
		mkdir(os.path.dirname(self.path))
		with openForWrite(self.path, 'wb') as f:
			f.write(self.content.encode('utf-8'))

def writeFileRule(ctx, path, content):
	""" Registers a `WriteFileAction` with the module context that writes the specified content (verbatim) to
	path, and returns it. """
	return ctx.addAction(WriteFileAction(os.path.basename(path), 'writing %s'%os.path.basename(path), path, content))
