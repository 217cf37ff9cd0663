# ==============================================================================
# MODVFS - COMMAND LINE INTERFACE
# ==============================================================================
# Command-line access to the layered virtual file system.
#
# Commands:
#   - list:    List files or folders of the merged view
#   - cat:     Print a virtual file as text
#   - extract: Write the merged view to a folder on disk
#   - pack:    Pack a folder into a mountable archive
#   - info:    Show mounted containers and index statistics
#   - bench:   Measure read throughput
#   - profile: Manage the mount profile stored in the config
#
# Containers are given with repeated --container options (mount order =
# priority, last wins). Without --container the config mount profile is used.
#
# Usage:
#   python main.py --cli list -c Data/Base.pak -c Data/Mod1.pak --recursive
#   python main.py --cli cat config/game.ini -c Data/Base.pak
#   python main.py --cli pack --source mods/MyMod --output Data/MyMod.pak --password secret
# ==============================================================================

import os
import sys
import time
import argparse
from typing import List, Optional

from .core.config import Config, get_config
from .core.exceptions import VFSError
from .core.manager import VFSManager
from .core.paths import output_path_for


# ==============================================================================
# COLOR HELPERS FOR TERMINAL OUTPUT
# ==============================================================================
class Colors:
    """ANSI color codes for terminal output."""
    HEADER = '\033[95m'
    BLUE = '\033[94m'
    CYAN = '\033[96m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    BOLD = '\033[1m'
    END = '\033[0m'

    @classmethod
    def disable(cls):
        """Disable colors (for non-supporting terminals)."""
        cls.HEADER = ''
        cls.BLUE = ''
        cls.CYAN = ''
        cls.GREEN = ''
        cls.YELLOW = ''
        cls.RED = ''
        cls.BOLD = ''
        cls.END = ''


def print_header(text: str):
    """Print a header."""
    print(f"\n{Colors.BOLD}{Colors.CYAN}{'=' * 60}{Colors.END}")
    print(f"{Colors.BOLD}{Colors.CYAN}  {text}{Colors.END}")
    print(f"{Colors.BOLD}{Colors.CYAN}{'=' * 60}{Colors.END}\n")


def print_success(text: str):
    """Print a success message."""
    print(f"{Colors.GREEN}✓ {text}{Colors.END}")


def print_error(text: str):
    """Print an error message."""
    print(f"{Colors.RED}✗ {text}{Colors.END}")


def print_info(text: str):
    """Print an info message."""
    print(f"{Colors.BLUE}ℹ {text}{Colors.END}")


def print_warning(text: str):
    """Print a warning message."""
    print(f"{Colors.YELLOW}⚠ {text}{Colors.END}")


def progress_callback(current: int, total: int, filename: str):
    """Progress callback for long operations."""
    percent = (current / total) * 100 if total > 0 else 0
    bar_length = 30
    filled = int(bar_length * current / total) if total > 0 else 0
    bar = '█' * filled + '░' * (bar_length - filled)

    # Truncate filename if too long
    max_name_len = 40
    if len(filename) > max_name_len:
        filename = '...' + filename[-(max_name_len-3):]

    print(f"\r[{bar}] {percent:5.1f}% | {current}/{total} | {filename}", end='', flush=True)

    if current >= total:
        print()  # New line when complete


# ==============================================================================
# VFS CONSTRUCTION
# ==============================================================================
def load_config(args) -> Config:
    """Get the config given with --config, or the global one."""
    if getattr(args, 'config', None):
        config = Config(args.config)
        config.load()
        return config
    return get_config()


def build_vfs(args) -> VFSManager:
    """
    Create a VFS from --container options, or from the config mount profile.

    Raises:
        VFSError: If a container cannot be mounted
    """
    config = load_config(args)
    containers = getattr(args, 'container', None)

    if not containers:
        if not config.containers:
            print_warning("No containers given and the mount profile is empty")
        return VFSManager.from_config(config)

    vfs = VFSManager(default_encoding=config.default_encoding, debug=config.debug_mode)
    try:
        for path in containers:
            vfs.add_root_container(path, args.password)
    except Exception:
        vfs.close()
        raise
    return vfs


# ==============================================================================
# LIST COMMAND
# ==============================================================================
def cmd_list(args):
    """List files (or folders) in a virtual folder."""
    with build_vfs(args) as vfs:
        if args.folders:
            items = vfs.get_folders_in_folder(args.folder, recursive=args.recursive)
        else:
            items = vfs.get_files_in_folder(args.folder, recursive=args.recursive,
                                            extension=args.ext)

        if args.folder and not vfs.folder_exists(args.folder):
            print_warning(f"Folder does not exist: {args.folder}")

        for item in sorted(items, key=str.lower):
            print(item)

        kind = "folders" if args.folders else "files"
        print_info(f"Total: {len(items)} {kind}")


# ==============================================================================
# CAT COMMAND
# ==============================================================================
def cmd_cat(args):
    """Print a virtual file as text."""
    with build_vfs(args) as vfs:
        text = vfs.get_file_contents_as_text(args.path, encoding=args.encoding)
        print(text)


# ==============================================================================
# EXTRACT COMMAND
# ==============================================================================
def cmd_extract(args):
    """Write the merged view (or one folder of it) to disk."""
    print_header("Extracting Virtual Files")

    with build_vfs(args) as vfs:
        files = vfs.get_files_in_folder(args.folder, recursive=True)
        if not files:
            print_warning("No files to extract")
            return

        # Refuse the whole package before writing anything if one entry escapes
        targets = [(path, output_path_for(args.output, path)) for path in files]

        print_info(f"Output: {args.output}")
        total = len(targets)

        for idx, (virtual_path, output_path) in enumerate(targets):
            progress_callback(idx + 1, total, virtual_path)

            os.makedirs(os.path.dirname(output_path), exist_ok=True)

            with open(output_path, 'wb') as f:
                f.write(vfs.get_file_contents(virtual_path))

        print_success(f"Extracted {total} files")


# ==============================================================================
# PACK COMMAND
# ==============================================================================
def cmd_pack(args):
    """Pack a folder into a mountable archive."""
    print_header("Packing Folder")

    print_info(f"Source: {args.source}")
    print_info(f"Output: {args.output}")
    if args.password is not None:
        print_info("Obfuscation: enabled")
    print()

    count = VFSManager.pack_folder(args.source, args.output, args.password,
                                   progress_callback=progress_callback)

    print_success(f"Packed {count} files into {args.output}")


# ==============================================================================
# INFO COMMAND
# ==============================================================================
def cmd_info(args):
    """Show mounted containers and statistics."""
    print_header("ModVFS Statistics")

    with build_vfs(args) as vfs:
        print(f"{Colors.BOLD}Mount order:{Colors.END}")
        for position, path in enumerate(vfs.containers, start=1):
            print(f"  {position}. {path}")

        stats = vfs.get_statistics()
        print()
        print(f"Containers mounted:   {stats['mounted_containers']}")
        print(f"Open archives:        {stats['open_archives']}")
        print(f"Virtual files:        {stats['total_files']}")
        print(f"Virtual folders:      {stats['total_folders']}")


# ==============================================================================
# BENCH COMMAND
# ==============================================================================
def cmd_bench(args):
    """Measure how fast files can be read through the VFS."""
    print_header("Read Benchmark")

    with build_vfs(args) as vfs:
        paths = args.path or vfs.entries[:3]
        if not paths:
            print_error("Nothing to read - the VFS is empty")
            return 1

        iterations = args.iterations or load_config(args).benchmark_iterations

        # Warmup
        for path in paths:
            vfs.get_file_contents(path)

        start = time.perf_counter()
        for i in range(iterations):
            vfs.get_file_contents(paths[i % len(paths)])
        elapsed_ms = (time.perf_counter() - start) * 1000

        print(f"Total: {elapsed_ms:.2f} ms for {iterations} iterations.")
        print(f"Per iteration: {elapsed_ms * 1000 / iterations:.2f} µs")


# ==============================================================================
# PROFILE COMMANDS
# ==============================================================================
def cmd_profile_list(args):
    """Show the mount profile."""
    print_header("Mount Profile")

    config = load_config(args)
    if not config.containers:
        print_warning("Mount profile is empty")
        return

    for position, item in enumerate(config.containers, start=1):
        flag = " (obfuscated)" if item.get('password') is not None else ""
        print(f"  {position}. {item['path']}{flag}")


def cmd_profile_add(args):
    """Append a container to the mount profile."""
    config = load_config(args)
    config.add_container(args.path, args.password)
    if not config.save():
        return 1
    print_success(f"Added to mount profile: {args.path}")


def cmd_profile_remove(args):
    """Remove a container from the mount profile."""
    config = load_config(args)
    if not config.remove_container(args.path):
        print_error(f"Not in mount profile: {args.path}")
        return 1
    if not config.save():
        return 1
    print_success(f"Removed from mount profile: {args.path}")


# ==============================================================================
# MAIN ARGUMENT PARSER
# ==============================================================================
def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all commands."""
    parser = argparse.ArgumentParser(
        prog="modvfs",
        description="ModVFS - Layered virtual file system for game mods",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s list -c Data/Base.pak -c Data/Mod1.pak -r      List the merged view
  %(prog)s cat folder/file2.txt -c Data/Mod1.pak          Print a file
  %(prog)s pack --source mods/MyMod --output MyMod.pak    Pack a folder
  %(prog)s profile add Data/Base.pak                      Save to mount profile
        """
    )
    parser.add_argument('--config', help='Config file (default: data/config.json)')
    parser.add_argument('--no-color', action='store_true', help='Disable colored output')

    # Shared container options
    mount = argparse.ArgumentParser(add_help=False)
    mount.add_argument('--container', '-c', action='append',
                       help='Folder or archive to mount (repeat, last wins)')
    mount.add_argument('--password', '-p', help='Obfuscation password for archives')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # list
    list_parser = subparsers.add_parser('list', parents=[mount], help='List files or folders')
    list_parser.add_argument('--folder', '-f', default='', help='Virtual folder (default: root)')
    list_parser.add_argument('--recursive', '-r', action='store_true', help='Include subfolders')
    list_parser.add_argument('--ext', help='Only files with this extension (e.g., txt)')
    list_parser.add_argument('--folders', action='store_true', help='List folders instead of files')
    list_parser.set_defaults(func=cmd_list)

    # cat
    cat_parser = subparsers.add_parser('cat', parents=[mount], help='Print a file as text')
    cat_parser.add_argument('path', help='Virtual file path')
    cat_parser.add_argument('--encoding', help='Text encoding (default from config)')
    cat_parser.set_defaults(func=cmd_cat)

    # extract
    extract_parser = subparsers.add_parser('extract', parents=[mount], help='Extract merged view')
    extract_parser.add_argument('--output', '-o', required=True, help='Output directory')
    extract_parser.add_argument('--folder', '-f', default='', help='Virtual folder (default: all)')
    extract_parser.set_defaults(func=cmd_extract)

    # pack
    pack_parser = subparsers.add_parser('pack', help='Pack a folder into an archive')
    pack_parser.add_argument('--source', '-s', required=True, help='Folder to pack')
    pack_parser.add_argument('--output', '-o', required=True, help='Archive to create')
    pack_parser.add_argument('--password', '-p', help='Obfuscation password')
    pack_parser.set_defaults(func=cmd_pack)

    # info
    info_parser = subparsers.add_parser('info', parents=[mount], help='Show statistics')
    info_parser.set_defaults(func=cmd_info)

    # bench
    bench_parser = subparsers.add_parser('bench', parents=[mount], help='Benchmark reads')
    bench_parser.add_argument('--path', action='append', help='Virtual file to read (repeat)')
    bench_parser.add_argument('--iterations', '-n', type=int, help='Number of reads')
    bench_parser.set_defaults(func=cmd_bench)

    # profile
    profile_parser = subparsers.add_parser('profile', help='Manage the mount profile')
    profile_sub = profile_parser.add_subparsers(dest='subcommand')

    profile_list = profile_sub.add_parser('list', help='Show the mount profile')
    profile_list.set_defaults(func=cmd_profile_list)

    profile_add = profile_sub.add_parser('add', help='Append a container')
    profile_add.add_argument('path', help='Folder or archive path')
    profile_add.add_argument('--password', '-p', help='Obfuscation password')
    profile_add.set_defaults(func=cmd_profile_add)

    profile_remove = profile_sub.add_parser('remove', help='Remove a container')
    profile_remove.add_argument('path', help='Folder or archive path')
    profile_remove.set_defaults(func=cmd_profile_remove)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for CLI.

    Returns:
        Exit code (0 for success)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.no_color or not sys.stdout.isatty():
        Colors.disable()

    if not args.command:
        parser.print_help()
        return 0

    if not hasattr(args, 'func'):
        # Print help for the subcommand
        parser.parse_args([args.command, '--help'])
        return 0

    try:
        result = args.func(args)
    except VFSError as e:
        print()
        print_error(str(e))
        return 1
    except OSError as e:
        print()
        print_error(f"I/O error: {e}")
        return 1

    return result or 0


if __name__ == "__main__":
    sys.exit(main())
