"""
bjpeg
Baseline JPEG decoder - command line front end
"""

import sys


USAGE = """\
Usage: python main.py <image.jpg> [-o out.png] [--compare] [--nearest]
       python main.py --synthetic [quality] [-o out.png] [--nearest]"""


def report(data: bytes, output=None, compare=False, upsampling='bicubic') -> int:
    """Decode `data`, print a summary and optionally save/compare."""
    from bjpeg import Decoder, DecodeResult, DecoderOptions
    from bjpeg.utils.metrics import Timer, compute_psnr, max_abs_error
    from bjpeg.utils.image_io import decode_with_opencv, save_image

    decoder = Decoder(DecoderOptions(upsampling=upsampling))
    timer = Timer()
    result = timer.measure_decode(decoder.decode, data)
    if result != DecodeResult.OK:
        print(f"Decode failed: {result.name}")
        return 1

    image = decoder.image
    print(f"Image:     {image.width}x{image.height} {'RGB' if image.is_color else 'grayscale'}")
    print(f"Output:    {decoder.image_size} bytes")
    print(f"Time:      {timer.decode_time_ms:.2f} ms")

    if compare:
        reference = decode_with_opencv(data)
        if reference is None or reference.shape != image.pixels.shape:
            print("OpenCV:    no comparable reference decode")
        else:
            print(f"PSNR:      {compute_psnr(reference, image.pixels):.2f} dB vs OpenCV")
            print(f"Max error: {max_abs_error(reference, image.pixels)}")

    if output:
        save_image(image.pixels, output)
        print(f"\nSaved: {output}")
    return 0


def run_cli(args) -> int:
    """Parse argv-style arguments and run one decode."""
    from bjpeg.utils.test_images import generate_demo_image
    from bjpeg.utils.image_io import encode_jpeg, read_bytes

    if not args or args[0] == '--help':
        print(USAGE)
        return 0

    output = None
    if '-o' in args:
        idx = args.index('-o')
        if idx + 1 >= len(args):
            print(USAGE)
            return 2
        output = args[idx + 1]
        args = args[:idx] + args[idx + 2:]
    compare = '--compare' in args
    upsampling = 'nearest' if '--nearest' in args else 'bicubic'
    args = [a for a in args if a not in ('--compare', '--nearest')]
    if not args:
        print(USAGE)
        return 2

    if args[0] == '--synthetic':
        quality = int(args[1]) if len(args) > 1 else 75
        print("Generating test image...")
        data = encode_jpeg(generate_demo_image("gradient"), quality=quality)
        compare = True
        print(f"Quality:   {quality}")
    else:
        print(f"Loading: {args[0]}")
        data = read_bytes(args[0])

    return report(data, output=output, compare=compare, upsampling=upsampling)


def main():
    sys.exit(run_cli(sys.argv[1:]))


if __name__ == '__main__':
    main()
