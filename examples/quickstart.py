"""
SpritePacker Quick Start Example

This example packs every 8-bit .bmp under a sprite folder into one atlas.
"""

from spritepacker import SpritePacker, PackerSettings

packer = SpritePacker()

print("Packing assets/sprites...")
result = packer.build("assets/sprites", palette="assets/palette.bmp")
result.save("output/SpriteAtlas.png")
print(f"✅ Saved {result.size[0]}x{result.size[1]} atlas to output/SpriteAtlas.png")

for failure in result.pack.failures:
    print(f"⚠️  Could not place {failure.identifier} ({failure.reason.value})")

print("\nPacking PNG icons with a power-of-two height...")
icons = SpritePacker(PackerSettings(extension=".png", max_sprite_size=128, pow2_height=True))
icons.build("assets/icons").save("output/IconAtlas.png")
print("✅ Saved to output/IconAtlas.png")
