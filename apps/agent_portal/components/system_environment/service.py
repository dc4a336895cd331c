"""
System Environment Service
Collects operating system, interpreter, database and product information
for diagnostics and support bundles
"""

import logging
import os
import platform
import re
import socket
import subprocess
import sys
from datetime import datetime
from importlib import metadata

import psutil

logger = logging.getLogger(__name__)

OS_MAP = {
    'linux': 'Linux',
    'freebsd': 'FreeBSD',
    'openbsd': 'OpenBSD',
    'darwin': 'MacOSX',
}

ETC_ISSUE = '/etc/issue'

VERSION_PATTERN = re.compile(
    r"""^\s*(?:__version__|VERSION)\s*(?::\s*\w+\s*)?=\s*['"]([^'"]+)['"]""",
    re.MULTILINE,
)


class EnvironmentService:
    """Service for the System Environment component

    Stateless apart from its collaborators: the configuration mapping
    and the database handle.
    """

    def __init__(self, config, database):
        self.config = config
        self.database = database

    def get_os_info(self):
        """Collect operating system information

        Returns e.g.:
            {
                'Distribution': 'debian',
                'Hostname': 'servername.example.com',
                'OS': 'Linux',
                'OSName': 'debian 12',
                'Path': '/usr/local/bin:/usr/bin:/bin',
                'POSIX': ['Linux', 'servername', '6.1.0-18-amd64', '#1 SMP ...', 'x86_64'],
                'User': 'agent',
                ...
            }
        """
        platform_key = self._platform_key()

        os_name = None
        distribution = None
        if re.search(r'(linux|unix|netbsd)', platform_key, re.IGNORECASE):
            if platform_key == 'linux':
                distribution_name, distribution_version = self._linux_distribution()
                distribution = distribution_name or 'unknown'
                if distribution_name:
                    os_name = f"{distribution_name} {distribution_version or ''}"
            elif os.path.exists(ETC_ISSUE):
                os_name = self._read_first_line(ETC_ISSUE)

        elif platform_key == 'darwin':
            mac_version = self._read_command_output(['sw_vers', '-productVersion'])
            os_name = 'MacOSX ' + mac_version

        elif platform_key in ('freebsd', 'openbsd'):
            bsd_version = self._read_command_output(['uname', '-r'])
            os_name = f"{OS_MAP[platform_key]} {bsd_version}"

        environ = os.environ
        return {
            'Hostname': socket.getfqdn(),
            'OSName': os_name or 'Unknown version',
            'Distribution': distribution,
            'User': environ.get('USER') or environ.get('USERNAME'),
            'Path': environ.get('PATH'),
            'HostType': environ.get('HOSTTYPE'),
            'LcCtype': environ.get('LC_CTYPE'),
            'Cpu': environ.get('CPU'),
            'MachType': environ.get('MACHTYPE'),
            'POSIX': list(platform.uname())[:5],
            'OS': OS_MAP.get(platform_key, platform_key),
        }

    def get_module_version(self, module, search_path=None):
        """Return the version of an installed Python module

        Walks the include path (sys.path by default) for the module file
        and returns None if the module is not installed.
        """
        if not module or not all(part.isidentifier() for part in module.split('.')):
            raise ValueError(f"Invalid module name: {module!r}")

        relative = module.replace('.', os.sep)
        candidates = [relative + '.py', os.path.join(relative, '__init__.py')]

        # first readable location along the include path wins
        path = None
        for directory in (sys.path if search_path is None else search_path):
            for candidate in candidates:
                possible_location = os.path.join(directory or os.curdir, candidate)
                if os.path.isfile(possible_location) and os.access(possible_location, os.R_OK):
                    path = possible_location
                    break
            if path:
                break

        if not path:
            return None

        # metadata only counts when the located file belongs to the distribution
        version = self._distribution_version(module.split('.')[0], path)
        if version:
            return version
        return self._parse_version(path)

    def get_python_info(self, bundled_modules=False):
        """Collect interpreter information

        With bundled_modules the versions of the modules listed in
        BUNDLED_MODULES are added under 'Modules'.
        """
        env_python = {
            'PythonVersion': platform.python_version(),
        }

        modules = {}
        if bundled_modules:
            for module in self.config.get('BUNDLED_MODULES') or []:
                modules[module] = self.get_module_version(module)

        if modules:
            env_python['Modules'] = modules

        return env_python

    def get_db_info(self):
        """Collect database information"""
        return {
            'Host': self.config.get('DATABASE_HOST'),
            'Database': self.config.get('DATABASE'),
            'User': self.config.get('DATABASE_USER'),
            'Type': self.config.get('DATABASE_TYPE') or self.database.type,
            'Version': self.database.version(),
        }

    def get_product_info(self):
        """Collect product information"""
        return {
            'Version': self.config.get('VERSION'),
            'Home': self.config.get('HOME'),
            'Host': self.config.get('FQDN'),
            'Product': self.config.get('PRODUCT'),
            'SystemID': self.config.get('SYSTEM_ID'),
            'DefaultLanguage': self.config.get('DEFAULT_LANGUAGE'),
        }

    def get_hardware_info(self):
        """Collect CPU, memory and disk information"""
        try:
            cpu_freq = self._cpu_freq()
            cpu_info = {
                'name': platform.processor() or 'Unknown CPU',
                'cores': psutil.cpu_count(logical=False),
                'threads': psutil.cpu_count(logical=True),
                'frequency': cpu_freq._asdict() if cpu_freq else None
            }

            memory = psutil.virtual_memory()
            memory_info = {
                'total': memory.total // 1024 // 1024,  # MB
                'available': memory.available // 1024 // 1024,  # MB
                'percent': memory.percent
            }

            disk = psutil.disk_usage(os.path.abspath(os.sep))
            disk_info = {
                'total': disk.total // 1024 // 1024 // 1024,  # GB
                'used': disk.used // 1024 // 1024 // 1024,  # GB
                'free': disk.free // 1024 // 1024 // 1024,  # GB
                'percent': disk.percent
            }

            return {
                'cpu': cpu_info,
                'memory': memory_info,
                'disk': disk_info,
                'boot_time': datetime.fromtimestamp(psutil.boot_time()).isoformat()
            }

        except (psutil.Error, OSError) as e:
            logger.exception(f"Hardware info collection failed: {e}")
            return {'error': str(e)}

    def get_support_bundle(self, bundled_modules=False):
        """All environment sections in one document"""
        return {
            'os': self.get_os_info(),
            'python': self.get_python_info(bundled_modules=bundled_modules),
            'database': self.get_db_info(),
            'product': self.get_product_info(),
            'hardware': self.get_hardware_info(),
            'timestamp': datetime.now().isoformat()
        }

    def get_section(self, section, bundled_modules=False):
        """Single environment section by name"""
        if section == 'os':
            return self.get_os_info()
        if section == 'python':
            return self.get_python_info(bundled_modules=bundled_modules)
        if section == 'database':
            return self.get_db_info()
        if section == 'product':
            return self.get_product_info()
        if section == 'hardware':
            return self.get_hardware_info()
        raise ValueError(f"Unknown environment section: {section}")

    def _platform_key(self):
        # sys.platform carries a release suffix on the BSDs, e.g. 'freebsd14'
        match = re.match(r'(freebsd|openbsd|netbsd)\d*$', sys.platform)
        if match:
            return match.group(1)
        return sys.platform

    def _cpu_freq(self):
        # not every platform exposes a frequency source
        try:
            return psutil.cpu_freq()
        except (NotImplementedError, OSError) as e:
            logger.debug(f"CPU frequency unavailable: {e}")
            return None

    def _linux_distribution(self):
        """Distribution id and version from os-release, (None, None) if unavailable"""
        try:
            os_release = platform.freedesktop_os_release()
        except OSError as e:
            logger.debug(f"os-release not readable: {e}")
            return None, None
        return os_release.get('ID'), os_release.get('VERSION_ID')

    def _read_first_line(self, location):
        try:
            with open(location, encoding='utf-8', errors='replace') as handle:
                return handle.readline().strip() or None
        except OSError as e:
            logger.debug(f"Cannot read {location}: {e}")
            return None

    def _read_command_output(self, command):
        """Stripped stdout of a command, empty string on failure"""
        try:
            result = subprocess.run(command, capture_output=True, text=True, timeout=5)
        except (OSError, subprocess.SubprocessError) as e:
            logger.debug(f"Command {command[0]} failed: {e}")
            return ''
        if result.returncode != 0:
            logger.debug(f"Command {command[0]} exited with {result.returncode}")
            return ''
        return result.stdout.strip()

    def _distribution_version(self, top_level, path):
        """Version of the installed distribution that ships the file at path"""
        location = os.path.realpath(path)
        for name in metadata.packages_distributions().get(top_level) or []:
            try:
                distribution = metadata.distribution(name)
            except metadata.PackageNotFoundError:
                continue
            for file in distribution.files or []:
                if os.path.realpath(distribution.locate_file(file)) == location:
                    return distribution.version
        return None

    def _parse_version(self, path):
        try:
            with open(path, encoding='utf-8', errors='replace') as handle:
                match = VERSION_PATTERN.search(handle.read())
        except OSError as e:
            logger.debug(f"Cannot read {path}: {e}")
            return None
        return match.group(1) if match else None
