# exceptions - Holds the main exception(s) used by build modules
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
The `buildinfo.utils.buildexceptions.BuildException` class used for (non-internal) problems encountered while building.
"""

import traceback, sys


class BuildException(Exception):
	""" A BuildException represents an error caused by an incorrect build configuration or a runtime build problem,
	i.e. anything that isn't an internal buildinfo error.

	Typically a BuildException will not result in a python stack trace being
	printed whereas other exception types will, so only raise one if you're
	sure the message includes all required diagnostic information already.

	>>> str(BuildException('  Property "FOO" is not defined '))
	'Property "FOO" is not defined'

	>>> BuildException('Invalid value', location='product.properties:3').toSingleLineString(None)
	'product.properties:3 : Invalid value'

	>>> BuildException('Invalid value').toSingleLineString('<BuildInfoProp> buildinfo.prop')
	'<BuildInfoProp> buildinfo.prop : Invalid value'
	"""

	def __init__(self, message, location=None, causedBy=False):
		"""
		BuildExceptions thrown during operations on a module (action generation, execution, cleaning)
		will have information about that module added when it is logged, so there is usually no reason
		to explicitly add the module name into the message.

		To avoid losing essential diagnostic information, do not catch arbitrary
		non-BuildException classes and wrap in a BuildException.

		@param message: the error cause (does not need to include the module name)

		@param location: usually None, or else a ``file:line`` string identifying the source line
		(e.g. in a .properties file) that caused the problem.

		@param causedBy: if True, takes the exception currently on the stack as the cause of this exception, and
		adds it to the build exception message. If the cause is not a BuildException, then its stack
		trace will be captured if this is True.
		"""
		assert message
		self.__msg = message.strip()

		if causedBy:
			causedBy = sys.exc_info()
			causedByExc = causedBy[1]

			if isinstance(causedByExc, BuildException):
				causedByMsg = causedByExc.__msg
				if not location: location = causedByExc.__location
				self.__causedByTraceback = None # tracebacks not needed for BuildException, by definition
			else:
				causedByMsg = '%s'%causedByExc
				self.__causedByTraceback = ''.join(traceback.format_exception(*causedBy))

			if (causedByMsg not in self.__msg): self.__msg += (': %s'%causedByMsg)

		else:
			assert causedBy==False
			self.__causedByTraceback = None

		self.__location = location or None

		Exception.__init__(self, self.__msg)

	def getLocation(self):
		""" Returns the ``file:line`` location string associated with this exception, or None. """
		return self.__location

	def __repr__(self):
		""" Return the type of the exception and the message on a single line"""
		return 'BuildException<%s>'%self.toSingleLineString(None)
	def __str__(self):
		""" Return the exception message on a single line """
		return self.toSingleLineString(None)

	def toSingleLineString(self, module):
		""" Return the exception message formatted to be a single line.

		Includes the name of the failed module if called with a module.

		@param module: The module (or its display string) causing the exception.
		"""
		result = self.__msg

		# if we have a valid location, always display that (unless it's already in a nested exception)
		if self.__location and not str(self.__location) in result:
			result = '%s : %s'%(self.__location, result)

		if module:
			result = '%s : %s'%(module, result)

		return result

	def toMultiLineString(self, module, includeStack=False):
		""" Return the exception message, on multiple lines if necessary, possibly including the stack trace.

		@param module: The module causing the exception.
		@param includeStack: If true, also includes the stack trace of the exception that caused this one.
		"""
		result = self.__msg
		if module:
			result = '%s : %s'%(module, result)

		if self.__location:
			result += '\n  %s'%self.__location

		if self.__causedByTraceback and includeStack:
			result = result + '\n\nCaused by:\n%s'%(self.__causedByTraceback)
		return result.strip()
