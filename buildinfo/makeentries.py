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
Contains `MakeEntries`, which describes a module's output to a make-driven build.
"""

from buildinfo.utils.flatten import flatten

class MakeEntries(object):
	"""
	Metadata about one module output, written by the executor as a prebuilt module definition in
	``${OUTPUT_DIR}/buildinfo-modules.mk``.

	>>> e = MakeEntries('ETC', '/out/buildinfo.prop', extraEntries=[lambda entries: entries.setString('LOCAL_MODULE_PATH', '/out/system')])
	>>> e.setBoolIfTrue('LOCAL_UNINSTALLABLE_MODULE', False)
	>>> print(e.toMakefile('buildinfo.prop'), end='')
	include $(CLEAR_VARS)
	LOCAL_MODULE := buildinfo.prop
	LOCAL_MODULE_CLASS := ETC
	LOCAL_PREBUILT_MODULE_FILE := /out/buildinfo.prop
	LOCAL_MODULE_PATH := /out/system
	include $(BUILD_PREBUILT)

	@param cls: the module class, e.g. ``ETC``.
	@param outputFile: the path of the output file, or None.
	@param extraEntries: a function or list of functions that are called with this object when the entries are written, to add
	further entries using `setString` and `setBoolIfTrue`.
	"""
	def __init__(self, cls, outputFile=None, extraEntries=None):
		self.cls = cls
		self.outputFile = outputFile
		self.extraEntries = flatten(extraEntries)
		self.__entries = {} # insertion ordered

	def setString(self, key, value):
		self.__entries[key] = value

	def setBoolIfTrue(self, key, flag):
		""" Sets the entry to ``true`` if flag is True, otherwise leaves it unset. """
		if flag:
			self.__entries[key] = 'true'

	def getEntries(self):
		""" Invokes the extra entries functions and returns a list of (key, value) tuples. """
		for fn in self.extraEntries:
			fn(self)
		self.extraEntries = []
		return list(self.__entries.items())

	def toMakefile(self, moduleName):
		""" Returns the make fragment defining this entry as a prebuilt module. """
		lines = ['include $(CLEAR_VARS)', 'LOCAL_MODULE := %s'%moduleName, 'LOCAL_MODULE_CLASS := %s'%self.cls]
		if self.outputFile:
			lines.append('LOCAL_PREBUILT_MODULE_FILE := %s'%self.outputFile)
		for (k, v) in self.getEntries():
			lines.append('%s := %s'%(k, v))
		lines.append('include $(BUILD_PREBUILT)')
		return ''.join(l+'\n' for l in lines)
