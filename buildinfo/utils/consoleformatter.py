# buildinfo - build-time properties file generator
#
# Handlers for formatting stdout
#
# Copyright (c) 2015 - 2019 Software AG, Darmstadt, Germany and/or its licensors
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
Pluggable classes for customizing the format that buildinfo uses when writing log messages to stdout (for example,
for a make-driven build).
"""

import logging

_registeredConsoleFormatters = {}

class ConsoleFormatter(object):
	"""
	Base class for customizing the format used
	for handling log records when displaying to the command console/stdout.

	Use self.fmt.format(record) to format the message including (multi-line) python
	exception traces.

	This class is only used for stdout, it does not affect the format used
	to write messages to the on-disk log file.
	"""

	level = logging.ERROR

	def __init__(self, output, buildOptions, **kwargs):
		"""
		@param output: The output stream, which can cope with unicode characters.
		@param buildOptions: Dictionary of build options
		"""
		super().__init__()
		self.output = output
		self.fmt = logging.Formatter()

	def setLevel(self, level):
		self.level = level
	def handle(self, record):
		raise NotImplementedError("Not Implemented")

def registerConsoleFormatter(name: str, handler: ConsoleFormatter):
	"""
	Make a custom console formatter class available for use by buildinfo.
	"""
	_registeredConsoleFormatters[name] = handler

def getConsoleFormatter(name: str):
	""" Returns the registered formatter class with the specified (case-insensitive) name, or None. """
	for h in _registeredConsoleFormatters:
		if h.upper() == name.upper():
			return _registeredConsoleFormatters[h]
	return None

class DefaultConsoleFormatter(ConsoleFormatter):
	"""
	The default text output formatter for buildinfo.
	"""
	def __init__(self, stream, buildOptions, **kwargs):
		ConsoleFormatter.__init__(self, stream, buildOptions, **kwargs)
		self.delegate = logging.StreamHandler(stream)
		self.delegate.setFormatter(logging.Formatter('[%(levelname)s] %(message)s', None))
	def handle(self, record):
		self.delegate.handle(record)
	def setLevel(self, level):
		ConsoleFormatter.setLevel(self, level)
		self.delegate.setLevel(level)

class MakeConsoleFormatter(ConsoleFormatter):
	"""
	ConsoleFormatter that logs in a format that matches GNU Make.

	Output format::

		file:line: category: description

	"""
	def handle(self, record):
		if record.levelno < self.level: return
		if record.levelno >= logging.ERROR:
			category = 'error'
		elif record.levelno == logging.WARNING:
			category = 'warning'
		else:
			category = None

		if record.name in ["executor", "buildinfo"]:
			location = "buildinfo"
		elif record.pathname == None:
			location = record.funcName
		else:
			location = "%s:%s" % (record.pathname, record.lineno or 0)

		if category:
			self.output.write("%s: %s: %s\n" % (location, category, self.fmt.format(record)))
		else:
			self.output.write("%s\n" % self.fmt.format(record))

		self.output.flush()


registerConsoleFormatter("make", MakeConsoleFormatter)

registerConsoleFormatter("default", DefaultConsoleFormatter)
