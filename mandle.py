import logging
import subprocess
import sys
from argparse import ArgumentParser

from multibrot import (
    ConfigError,
    RenderConfig,
    dump_config,
    launch_viewer,
    load_config,
    render_frame,
    write_png,
)
from multibrot.imaging import DEFAULT_VIEWER

DEFAULT_OUTPUT = "./mandle.png"

logger = logging.getLogger("mandle")

VERBOSE = False


def log(message, *args, **kwargs):
    if VERBOSE:
        print(message, *args, file=sys.stderr, **kwargs)


def build_parser():
    defaults = RenderConfig()
    parser = ArgumentParser(description='Render an escape-time image of the Mandelbrot set and its Multibrot relatives.')

    parser.add_argument('--iter', type=int,
                        dest='max_iterations', help='number of iterations of z -> z^2 + c; a pixel uses at most this many, fewer if it does not come out black',
                        metavar='MAX_ITER', default=defaults.max_iterations)

    parser.add_argument('--pixel-width', type=int,
                        dest='pixel_width', help='number of pixels per row',
                        metavar='PIXEL_WIDTH', default=defaults.pixel_width)

    parser.add_argument('--pixel-height', type=int,
                        dest='pixel_height', help='number of rows of pixels',
                        metavar='PIXEL_HEIGHT', default=defaults.pixel_height)

    parser.add_argument('--display-height', type=int,
                        dest='display_height', help='open the image in the viewer afterwards; 0 keeps its size, a positive value sets the window height',
                        metavar='DISPLAY_HEIGHT', default=-1)

    parser.add_argument('--exp', type=float,
                        dest='exponent', help='the Mandelbrot set has exponent 2 (z -> z^2 + c) but others work too',
                        metavar='EXPONENT', default=defaults.exponent)

    parser.add_argument('-r', '--center-real', type=float,
                        dest='center_real', help='real part of the complex number at the centre of the image',
                        metavar='CENTER_REAL', default=defaults.center_real)

    parser.add_argument('-i', '--center-imag', type=float,
                        dest='center_imag', help='imaginary part of the complex number at the centre of the image',
                        metavar='CENTER_IMAG', default=defaults.center_imag)

    parser.add_argument('--height', type=float,
                        dest='height', help='height of the imaged region of the complex plane (not the resolution)',
                        metavar='HEIGHT', default=defaults.height)

    parser.add_argument('-f', '--freq', type=float,
                        dest='color_freq', help='how fast the hue varies; smaller is more uniform, more iterations add variation near the boundary',
                        metavar='FREQ', default=defaults.color_freq)

    parser.add_argument('--hue', type=float,
                        dest='hue_offset', help='absolute hue offset, periodic so --hue=1 and --hue=0 are the same',
                        metavar='HUE', default=defaults.hue_offset)

    parser.add_argument('--alpha-decay', type=float,
                        dest='alpha_decay', help='between 0 and 1; the nth colour has alpha_decay^n opacity, 1 means no decay',
                        metavar='ALPHA_DECAY', default=defaults.alpha_decay)

    parser.add_argument('--workers', type=int,
                        dest='workers', help='number of row bands rendered in parallel',
                        metavar='WORKERS', default=defaults.workers)

    parser.add_argument('--processes', action='store_true',
                        help='run workers as processes instead of threads')

    parser.add_argument('--viewer', type=str, default=DEFAULT_VIEWER,
                        help='program used by --display-height')

    parser.add_argument('--stdout', action='store_true',
                        help='write the PNG data to standard output')

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='enable verbose logging')

    subparsers = parser.add_subparsers(dest='command', metavar='COMMAND')
    load = subparsers.add_parser('load', help='load render settings json from path')
    load.add_argument('path', help='the path to the file')
    dump = subparsers.add_parser('dump', help='dump options to a settings json file; dumps defaults if no options are set')
    dump.add_argument('path', help='the path to the file')
    to = subparsers.add_parser('to', help='save the image to the specified path')
    to.add_argument('path', help='the path to the file')

    return parser


def config_from_args(opt) -> RenderConfig:
    return RenderConfig(
        max_iterations=opt.max_iterations,
        pixel_width=opt.pixel_width,
        pixel_height=opt.pixel_height,
        exponent=opt.exponent,
        center_real=opt.center_real,
        center_imag=opt.center_imag,
        height=opt.height,
        color_freq=opt.color_freq,
        hue_offset=opt.hue_offset,
        alpha_decay=opt.alpha_decay,
        workers=opt.workers,
    )


def print_progress(percent: float) -> None:
    print("{0:05.2f}%".format(percent), end='\r', flush=True)


def main(argv=None):
    parser = build_parser()
    opt = parser.parse_args(argv)

    global VERBOSE
    VERBOSE = bool(opt.verbose)
    logging.basicConfig(level=logging.DEBUG if VERBOSE else logging.INFO, format='%(message)s')

    config = config_from_args(opt)

    if opt.command == 'dump':
        logger.info("Dumping...")
        written = dump_config(config, opt.path)
        print(written, "bytes")
        logger.info("Done")
        return 0

    if opt.command == 'load':
        logger.info("Loading")
        try:
            config = load_config(opt.path, base=config)
        except (OSError, ConfigError) as exc:
            parser.error(f"cannot load {opt.path}: {exc}")

    if config.workers < 1:
        parser.error("--workers must be at least 1.")

    dst = opt.path if opt.command == 'to' else DEFAULT_OUTPUT
    log("rendering {0}x{1} into {2}".format(config.pixel_width, config.pixel_height, "stdout" if opt.stdout else dst))

    try:
        result = render_frame(
            config,
            executor='process' if opt.processes else 'thread',
            progress=None if opt.stdout else print_progress,
        )
    except ValueError as exc:
        parser.error(str(exc))

    if opt.stdout:
        write_png(result.pixels, sys.stdout.buffer)
    else:
        print()
        print("Done generating")
        write_png(result.pixels, dst)

    if opt.display_height >= 0 and not opt.stdout:
        try:
            launch_viewer(dst, opt.display_height, result.view.aspect, program=opt.viewer)
        except (OSError, subprocess.CalledProcessError) as exc:
            logger.error("viewer failed: %s", exc)
            return 1

    logger.info("Done")
    return 0


if __name__ == '__main__':
    sys.exit(main())
