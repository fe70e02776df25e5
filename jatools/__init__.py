"""
Small workstation utilities: passphrases, remote edit/deploy helpers,
rclone mounts, system updates and an installer for all of them.
"""

__version__ = "1.3.1"
