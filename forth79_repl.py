"""
Command line front end for :mod:`forth79`.

    forth79 program.fth stack-size=1024

runs every line of program.fth, stopping at the first line that fails, and
then writes whatever is left on the stack to stack.fth. Without a file it
starts an interactive session instead.
"""
import argparse
import logging
import readline  # noqa: F401
import sys

import forth79

PROMPT = ''
DEFAULT_STACK_SIZE = 1024
DEFAULT_STACK_FILE = 'stack.fth'

log = logging.getLogger('forth79')


def forth_repl(m):
    print('Type "BYE" or input an end of file (Ctrl+D) to quit.')

    cmd = input(PROMPT)
    while cmd.upper() != 'BYE':
        print(m.eval(cmd))
        cmd = input(PROMPT)


def run_file(m, source, out=None):
    """
    Feeds the lines of the open file `source` to the machine, stopping after
    the first one that fails. Returns True if every line went through.
    """
    if out is None:
        out = sys.stdout
    for number, line in enumerate(source, 1):
        if not m.interpret_line(line.rstrip('\r\n'), out):
            log.info('stopped at line %d', number)
            return False
    return True


def write_stack(m, path):
    with open(path, 'w') as f:
        f.write(m.get_stack_output())


def stack_size_setting(text):
    """ Reads a `stack-size=BYTES` argument. """
    key, sep, value = text.partition('=')
    if key.lower() != 'stack-size' or not sep:
        raise argparse.ArgumentTypeError('expected stack-size=BYTES, got %r' % text)
    try:
        return int(value)
    except ValueError:
        raise argparse.ArgumentTypeError('invalid stack size: %r' % value)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog='forth79',
        description='A Forth-79 subset interpreter.')
    parser.add_argument(
        'source', nargs='?', default=None,
        help='file to run, one statement per line (interactive if omitted)')
    parser.add_argument(
        'size_setting', nargs='?', type=stack_size_setting, default=None,
        metavar='stack-size=BYTES',
        help='same as --stack-size, in the form stack-size=BYTES')
    parser.add_argument(
        '--stack-size', type=int, default=DEFAULT_STACK_SIZE, metavar='BYTES',
        help='stack memory in bytes, two per cell (default: %(default)s)')
    parser.add_argument(
        '--stack-file', default=DEFAULT_STACK_FILE, metavar='FILE',
        help='where to write the remaining stack after running a file '
             '(default: %(default)s)')
    parser.add_argument(
        '-v', '--verbose', action='store_true', help='print status messages')
    parser.add_argument(
        '--debug', action='store_true', help='print debug messages')
    args = parser.parse_args(argv)
    if args.size_setting is not None:
        args.stack_size = args.size_setting
    return args


def main(argv=None):
    args = parse_args(argv)

    logging.basicConfig(level=logging.WARNING)
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)
    elif args.verbose:
        logging.getLogger().setLevel(logging.INFO)

    m = forth79.Machine()
    m.set_stack_size(args.stack_size)

    if args.source is None:
        try:
            forth_repl(m)
        except EOFError:
            pass  # perfectly acceptable
        return 0

    try:
        source = open(args.source)
    except OSError as e:
        print('Error when opening %s: %s' % (args.source, e), file=sys.stderr)
        return 1
    with source:
        run_file(m, source)
    sys.stdout.write('\n')

    try:
        write_stack(m, args.stack_file)
    except OSError as e:
        print('Error when writing %s: %s' % (args.stack_file, e), file=sys.stderr)
    return 0


if __name__ == '__main__':
    sys.exit(main())
