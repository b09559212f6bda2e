"""
Created on 19 Oct 2026
"""

import argparse
import asyncio
import logging
import sys

from pjlinkprojector import (
    DEFAULT_PORT,
    ErrorLevel,
    InputSource,
    MuteTarget,
    PJLinkConnectionError,
    PJLinkProjector,
    PJLinkProjectorError,
    PJLinkProjectorTCP,
)

_LOGGER = logging.getLogger(__name__)


async def _status(projector: PJLinkProjector):
    _LOGGER.info("Power            : %s", (await projector.get_power()).name)

    try:
        _LOGGER.info("Input            : %s", await projector.get_input())
        av_mute = await projector.get_av_mute()
        _LOGGER.info("Video mute       : %s", av_mute.video)
        _LOGGER.info("Audio mute       : %s", av_mute.audio)
    except PJLinkProjectorError as ex:
        # Input and mute are not available while the projector is off
        _LOGGER.info("%s", ex)

    for number, lamp in enumerate(await projector.get_lamps(), start=1):
        _LOGGER.info(
            "Lamp %s           : %s hours, %s",
            number,
            lamp.hours,
            "on" if lamp.on else "off",
        )

    error_status = await projector.get_error_status()
    for subsystem in ["fan", "lamp", "temperature", "cover_open", "filter", "other"]:
        level = getattr(error_status, subsystem)
        if level != ErrorLevel.OK:
            _LOGGER.warning("%s %s", subsystem, level.name)


async def _info(projector: PJLinkProjector):
    _LOGGER.info("Name             : %s", await projector.get_name())
    _LOGGER.info("Manufacturer     : %s", await projector.get_manufacturer())
    _LOGGER.info("Product          : %s", await projector.get_product_name())
    _LOGGER.info("Information      : %s", await projector.get_other_info())
    _LOGGER.info("Class            : %s", await projector.get_class())
    _LOGGER.info("Inputs           : %s", await projector.get_input_list())


async def main(projector: PJLinkProjector, action: str, arguments: list[str]):
    try:
        await projector.connect()
    except (PJLinkConnectionError, PJLinkProjectorError) as ex:
        _LOGGER.error("Failed to connect to PJLink projector, reason: %s", ex)
        sys.exit(1)

    try:
        if action == "status":
            await _status(projector)
        elif action == "info":
            await _info(projector)
        elif action == "on":
            await projector.turn_on()
        elif action == "off":
            await projector.turn_off()
        elif action == "input":
            await projector.set_input(arguments[0])
            source: InputSource = await projector.get_input()
            _LOGGER.info("Input            : %s", source)
        elif action == "avmute":
            target = MuteTarget[arguments[0].upper()]
            await projector.set_av_mute(target, arguments[1].lower() == "on")
        elif action == "raw":
            _LOGGER.info(await projector.send_raw_command(" ".join(arguments)))
    except PJLinkProjectorError as ex:
        _LOGGER.error("%s", ex)
        sys.exit(1)
    except PJLinkConnectionError as ex:
        _LOGGER.error("Problem communicating with PJLink projector, reason: %s", ex)
        sys.exit(1)
    finally:
        _LOGGER.info("Disconnecting from PJLink projector")
        await projector.disconnect()


if __name__ == "__main__":
    # Read command line arguments
    argparser = argparse.ArgumentParser()

    argparser.add_argument("host")
    argparser.add_argument("--port", type=int, default=DEFAULT_PORT)
    argparser.add_argument("--password")
    argparser.add_argument("--timeout", type=float)
    argparser.add_argument(
        "action", choices=["status", "info", "on", "off", "input", "avmute", "raw"]
    )
    argparser.add_argument("arguments", nargs="*")
    argparser.add_argument("--record", dest="record", action="store_true")
    argparser.add_argument("--debug", dest="debugLogging", action="store_true")

    args = argparser.parse_args()

    if args.debugLogging:
        logging.basicConfig(
            format="%(asctime)s %(levelname)-8s %(filename)s:%(lineno)d %(message)s",
            level=logging.DEBUG,
        )
    else:
        logging.basicConfig(format="%(message)s", level=logging.INFO)

    required_arguments = {"input": 1, "avmute": 2, "raw": 1}
    if len(args.arguments) < required_arguments.get(args.action, 0):
        argparser.error(f"{args.action} requires {required_arguments[args.action]} argument(s)")
    if args.action == "avmute" and args.arguments[0].upper() not in MuteTarget.__members__:
        argparser.error(f"avmute target must be one of {', '.join(MuteTarget.__members__)}")

    projector = PJLinkProjectorTCP(
        args.host, args.port, args.password, args.timeout, args.record
    )

    try:
        asyncio.run(main(projector, args.action, args.arguments))
    except KeyboardInterrupt:
        # Handle keyboard interrupt
        pass

    sys.exit(0)
