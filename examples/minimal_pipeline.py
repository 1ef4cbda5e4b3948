import asyncio
import os

from dotenv import load_dotenv

from layerproof import LayerProof, TextFragment
from layerproof.config import load_settings


async def main() -> None:
    # Load environment variables from .env if present
    load_dotenv()

    if not os.getenv("OPENAI_API_KEY"):
        raise RuntimeError(
            "OPENAI_API_KEY is not set. Please set it in your environment or .env file."
        )

    checker = LayerProof(settings=load_settings())

    layers = [
        TextFragment(id="title", name="Title", text="Ths is a tst."),
        TextFragment(id="price", name="Price", text="42.00"),
        TextFragment(id="cta", name="Button", text="Sign up now"),
    ]

    print("▶ Running LayerProof on sample layers...")
    outcome = await checker.check(layers, checker.batch_config(concurrency=2, delay=100))

    for layer in outcome.layers:
        print(f"\n{layer.name} ({layer.id}): {layer.text!r}")
        if not layer.issues:
            print("  no issues")
        for issue in layer.issues:
            print(f"  [{issue.type}] {issue.issue_text!r} -> {issue.suggestion!r}")

    print("\nStats:", outcome.stats.to_dict())


if __name__ == "__main__":
    asyncio.run(main())
