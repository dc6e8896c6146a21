# -*- coding: utf-8 -*-
"""
Provides the Option class for config file and command line parsing.
"""

__all__ = ['Option']

import sys

from configparser import ConfigParser
from optparse import OptionGroup, OptionParser
from os.path import basename, exists

from .base import MAX_ITERATIONS, home_layout

class Option(object):

    def __init__(self, args=None):

        usage = "%prog [--config filepath [section]] [options]"
        epilog = """
          Values exceeding the range specification are silently clipped to
          the respective minimum or maximum value. The origin and extent
          options override the home location of the selected layout.
          """
        epilog = " ".join([line.lstrip() for line in epilog.splitlines()])

        p = OptionParser(usage=usage, version="%prog 0.1.0", epilog=epilog)

        def _opt(parser, opt, t, h):
          if t is None:
            parser.add_option(opt, help=h, action="store_true", default=False)
          else:
            parser.add_option(opt, type=t, help=h, metavar="ARG")

        # allow options with underscore by replacing with dash
        args = list(sys.argv[1:] if args is None else args)
        for i in range(len(args)):
            if args[i].startswith('--'):
                name, sep, value = args[i].partition('=')
                args[i] = name.replace('_', '-') + sep + value

        # configure options
        _opt(p, "--shortcuts", None, "show keyboard shortcuts and exit")
        _opt(p, "--width", "int", "width of window [100-8000]: 1000")
        _opt(p, "--height", "int", "height of window [100-5000]: 700")
        _opt(p, "--layout", "int", "home layout [1-2]: 1")
        _opt(p, "--max-iters", "int", "maximum iterations [1-100000]: 1000")
        _opt(p, "--output", "string", "render one frame to image file and exit")

        g = OptionGroup(p, "Home Options (override the layout)")
        _opt(g, "--origin-x", "float", "home origin-x value [float]")
        _opt(g, "--origin-y", "float", "home origin-y value [float]")
        _opt(g, "--extent-x", "float", "home extent-x value [float > 0]")
        _opt(g, "--extent-y", "float", "home extent-y value [float > 0]")
        p.add_option_group(g)

        g = OptionGroup(p, "Navigation Options")
        _opt(g, "--zoom-factor", "float", "mouse wheel zoom factor [float > 1]: 1.5")
        _opt(g, "--big-zoom", "float", "keyboard +/- zoom factor [float > 1]: 10.0")
        _opt(g, "--move-factor", "float", "keyboard scroll factor [float]: 0.1")
        _opt(g, "--pan-on-release", "int", "pan once on release or every drag tick [0,1]: 1")
        p.add_option_group(g)

        g = OptionGroup(p, "CPU Options")
        _opt(g, "--num-threads", "int", "number of worker threads [1-256]: 8")
        _opt(g, "--num-partitions", "int", "number of column bands [1-width]: 32")
        p.add_option_group(g)

        p.set_defaults(
            width=1000, height=700, layout=1, max_iters=MAX_ITERATIONS,
            output=None, origin_x=None, origin_y=None, extent_x=None,
            extent_y=None, zoom_factor=1.5, big_zoom=10.0, move_factor=0.1,
            pan_on_release=1, num_threads=8, num_partitions=32 )

        # optionally, override defaults from a config file
        args = self.__handle_config(p, args)

        # process command-line arguments
        (opt, args) = p.parse_args(args)

        # show usage
        if len(args):
            p.print_help()
            sys.exit(2)
        if opt.shortcuts:
            show_keyboard_shortcuts()
            sys.exit(0)

        # clamp to minimum-maximum values
        self.width = max(100, min(8000, opt.width))
        self.height = max(100, min(5000, opt.height))
        self.layout = max(1, min(2, opt.layout))
        self.max_iters = max(1, min(100000, opt.max_iters))
        self.pan_on_release = max(0, min(1, opt.pan_on_release))
        self.num_threads = max(1, min(256, opt.num_threads))
        self.num_partitions = max(1, min(self.width, opt.num_partitions))
        self.zoom_factor = opt.zoom_factor if opt.zoom_factor > 1.0 else 1.5
        self.big_zoom = opt.big_zoom if opt.big_zoom > 1.0 else 10.0
        self.move_factor = opt.move_factor
        self.output = opt.output

        # home location, taken from the layout unless overridden
        home = home_layout(self.layout, self.width, self.height)
        self.origin_x = home[0] if opt.origin_x is None else opt.origin_x
        self.origin_y = home[1] if opt.origin_y is None else opt.origin_y
        self.extent_x = home[2] if opt.extent_x is None or opt.extent_x <= 0.0 else opt.extent_x
        self.extent_y = home[3] if opt.extent_y is None or opt.extent_y <= 0.0 else opt.extent_y

        del opt, args


    @classmethod
    def __handle_config(cls, parser, args):

        if len(args) >= 1 and args[0].startswith('--config'):
            try:
                (_, config_path) = args[0].split('=')
                del args[0]
            except ValueError:
                config_path = args[1]
                del args[1], args[0]

            if len(args) >= 1 and not args[0].startswith('-'):
                section = args[0]
                del args[0]
            else:
                section = 'common'

            if not exists(config_path):
                prog = basename(sys.argv[0])
                mesg = f"{prog}: error: no such file or directory: '{config_path}'"
                print(mesg, file=sys.stderr)
                sys.exit(2)

            config = ConfigParser(default_section=None, empty_lines_in_values=False)
            config.read(config_path)

            cls.__override_defaults(parser, config, 'common')
            if section != 'common':
                cls.__override_defaults(parser, config, section)

        return args


    @classmethod
    def __override_defaults(cls, parser, config, section):

        if not config.has_section(section):
            prog = basename(sys.argv[0])
            mesg = f"{prog}: error: no such section in config: '{section}'"
            print(mesg, file=sys.stderr)
            sys.exit(2)

        opt = dict()

        for key in ('width', 'height', 'layout', 'max_iters', 'pan_on_release',
                    'num_threads', 'num_partitions'):
            if config.has_option(section, key):
                opt[key] = int(config.get(section, key))

        for key in ('origin_x', 'origin_y', 'extent_x', 'extent_y',
                    'zoom_factor', 'big_zoom', 'move_factor'):
            if config.has_option(section, key):
                opt[key] = float(config.get(section, key))

        for key in ('output',):
            if config.has_option(section, key):
                opt[key] = str(config.get(section, key))

        if len(opt):
            parser.set_defaults(**opt)


def show_keyboard_shortcuts():

    print("""
Keyboard shortcuts:
  Zooming does not exceed double-precision limit.
  q) Escape) terminate the application and exit
  r) Home)   reset window back to the home location
  +)         zoom in 10x at the mouse position
  -)         zoom out 10x at the mouse position
  [) PageDn) zoom in from the center of the window
  ]) PageUp) zoom out from the center of the window
  e)         export the window RGB values to image.png
  a) Left)   scroll window left
  s) Down)   scroll window down
  d) Right)  scroll window right
  w) Up)     scroll window up

  Mouse:
    Wheel up/down zooms in/out at the mouse position.
    Drag with the left button to pan. Specify option --pan-on-release
    to pan once on release or on every drag tick.
    """.strip())


if __name__ == '__main__':
    print(vars(Option()))
