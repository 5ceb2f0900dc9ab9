# fileutils - helper methods related to the file system
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
Helpers for creating, writing and deleting files and directories, and for parsing ``.properties`` files.
"""

import shutil, os, os.path, time, platform
import stat, sys
import io
import errno

from buildinfo.utils.flatten import getStringList

import logging
log = logging.getLogger('fileutils')

__isWindows = platform.system()=='Windows'

if __isWindows: # Workaround required for windows filesystem semantics having a race condition between writes from POSIX API (which Python uses) and win32 API
	import win32file
	class Win32FileWriter(io.RawIOBase):
		def __init__(self, dest, mode='w', encoding=None, errors=None, newline=None):
			super(Win32FileWriter, self).__init__()
			assert 'w' in mode, 'Currently the Win32FileWriter class only supports writing, not reading'
			self.dest = dest
			self.__textWrapper = None if 'b' in mode else io.TextIOWrapper(self, encoding=encoding, errors=errors, newline=newline)
			self.__alreadyclosed = False

		def __enter__(self):
			self.Fd = win32file.CreateFile(self.dest, win32file.GENERIC_WRITE,
				win32file.FILE_SHARE_READ | win32file.FILE_SHARE_WRITE  | win32file.FILE_SHARE_DELETE,
				None, win32file.CREATE_ALWAYS, win32file.FILE_ATTRIBUTE_NORMAL, None)

			if self.__textWrapper is not None: return self.__textWrapper
			return self

		def writable(self): return True
		def write(self, data):
			err, byteswritten = win32file.WriteFile(self.Fd, data)
			return byteswritten

		def close(self):
			if self.__alreadyclosed: return # idempotent, since the text wrapper will try to close us too
			self.__alreadyclosed = True

			if self.__textWrapper is not None: self.__textWrapper.close()
			win32file.CloseHandle(self.Fd)

		def __exit__(self, ex_type, ex_val, tb):
			self.close()

openForWrite = Win32FileWriter if __isWindows else open
"""
Open file for writing and return a corresponding text or binary stream file object.

This has the same semantics as open/io.open, but should be used instead of open/io.open
to avoid file system race conditions on Windows. This class must be used from a
`with` clause.
"""

def mkdir(newdir):
	""" Recursively create the specified directory if it doesn't already exist.

	If it does, exit without error.

	@param newdir: The path to create.
	@return: newdir, to allow fluent use of this method.
	"""
	origdir = newdir
	newdir=normLongPath(newdir)
	if os.path.isdir(newdir): # already exists
		return origdir

	if os.path.isfile(newdir):
		raise IOError("A file with the same name as the desired dir, '%s', already exists" % newdir)

	try:
		os.makedirs(newdir)
	except Exception as e:
		if os.path.isdir(newdir):
			pass
		else:
			raise IOError('Problem creating directory %s: %s' % (newdir, e))
	return origdir

def deleteDir(path):
	""" Recursively delete the contents of a directory, making read-only files writable first if necessary.

	Does nothing if the directory doesn't exist.

	@param path: the path to delete.
	"""

	def handleRemoveReadonly(func, path, exc):
		excvalue = exc[1]
		if func in (os.rmdir, os.remove) and excvalue.errno == errno.EACCES:
			log.info("handleRemoveReadonly: making path writable before deleting: %s", path)
			os.chmod(path, stat.S_IRWXU| stat.S_IRWXG| stat.S_IRWXO) # 0777
			func(path)
			return
		raise

	path = normLongPath(path)
	if not os.path.exists(path):
		return

	if os.path.isfile(path):
		raise OSError("Unable to delete dir %s as this is a file not a directory" % (path))
	shutil.rmtree(path, ignore_errors=False, onerror=handleRemoveReadonly)

def deleteFile(path, allowRetry=True):
	"""Delete the specified file, with the option of automatically retrying once if the first attempt fails
	(to get around Windows weirdness), throwing an exception if the file still exists at the end of retrying.

	Use this instead of os.remove for improved robustness.

	Does nothing if the file doesn't already exist.

	@param path: The path to delete.

	@param allowRetry: If true, wait for a bit and retry the removal if it fails (default: true)
	"""
	path = normLongPath(path)
	try:
		if not os.path.lexists(path): return # use lexists in case we're deleting a symlink

		try:
			os.remove(path)
		except Exception:
			if os.path.lexists(path):
				raise

	except OSError as e:
		if os.path.isdir(path):
			raise OSError("Unable to delete file %s as this is a directory not a file" % (path))

		if allowRetry:
			log.debug("Failed to delete file %s on first attempt (%s), will retry in 5 seconds", path, e)
			time.sleep(5.0)
			deleteFile(path, allowRetry=False)
			log.debug("Deleted file successfully on retry: %s", path)
		else:
			raise OSError("Unable to delete file %s: %s" % (path, e))

def readFileIfExists(path, encoding='utf-8'):
	""" Returns the text contents of the specified file, or None if it does not exist. """
	path = normLongPath(path)
	if not os.path.isfile(path): return None
	with io.open(path, 'r', encoding=encoding, newline='') as f:
		return f.read()

def parsePropertiesFile(lines, excludeLines=None):
	"""
	Parse the contents of the specified properties file or line list, and return an ordered list
	of (key,value,lineno) pairs.

	@param lines: an open file handle or a sequence that can be iterated over to get each line in the file.

	@param excludeLines: a string of list of strings to search for, any KEY containing these strings will be ignored

	>>> parsePropertiesFile(['a','b=c',' z  =  x', 'a=d #foo', '#g=h'])
	[('b', 'c', 2), ('z', 'x', 3), ('a', 'd', 4)]
	>>> parsePropertiesFile(['a=b','c=d#foo','XfooX=e', 'f=h'], excludeLines='foo')
	[('a', 'b', 1), ('c', 'd', 2), ('f', 'h', 4)]
	>>> parsePropertiesFile(['PLATFORM_BASE_OS=', 'PLATFORM_SECURITY_PATCH = 2024-01-01'])
	[('PLATFORM_BASE_OS', '', 1), ('PLATFORM_SECURITY_PATCH', '2024-01-01', 2)]
	"""
	excludeLines = getStringList(excludeLines)
	result = []

	lineNo = 0

	for line in lines:
		lineNo += 1

		if '#' in line:
			line = line[:line.find('#')].strip()
		line = line.strip()
		if not line or line.startswith('#') or line.startswith('//') or not '=' in line:
			continue

		key = line[:line.find('=')].strip()
		value = line[line.find('=')+1:].strip()

		if [x for x in excludeLines if x in key]:
			log.debug('Ignoring property line due to exclusion: %s', line)
			continue

		# NB: not a full implementation of .properties escaping, but this is all we need for now
		value = value.replace('\\\\','\\')

		result.append((key,value, lineNo))
	return result

def isDirPath(path):
	""" Returns true if the path is a directory (ends with / or the OS separator).

	>>> isDirPath(None)
	False

	>>> isDirPath('a/')
	True

	>>> isDirPath('a/b')
	False
	"""
	try:
		return path[-1] in {'/', os.sep}
	except Exception:
		return False

__normLongPathCache = {} # GIL protects integrity of dict, no need for extra locking as it's only a cache

def normLongPath(path):
	"""
	Normalizes and absolutizes a path (os.path.abspath), and on
	windows adds the "\\\\?\\" prefix needed to force correct handling of long
	(>256 chars) paths.

	@param path: the path to be converted.
	"""
	if not path: return path

	if path in __normLongPathCache: return __normLongPathCache[path]
	inputpath = path

	if __isWindows and len(path)>2 and path[1] == ':' and path[0] >= 'A' and path[0] <= 'Z':
		path = path[0].lower()+path[1:]

	if __isWindows and path.startswith('\\\\?\\'):
		path = path.replace('/', '\\')
	else:
		# abspath also normalizes slashes
		path = os.path.abspath(path)+(os.path.sep if isDirPath(path) else '')

		if __isWindows and not path.startswith('\\\\?\\'):
			if path.startswith('\\\\'):
				path = '\\\\?\\UNC\\'+path.lstrip('\\')
			else:
				path = '\\\\?\\'+path
	__normLongPathCache[inputpath] = path
	return path
