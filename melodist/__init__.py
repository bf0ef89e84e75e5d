"""
Melodist - procedural melody generation for Python.

Melodist writes short melodies by letting a variable-order Markov chain
propose the next note and a small layer of music theory decide whether to
keep it. The chain learns from example note sequences, including the
melodies it has already generated, so output drifts towards whatever it is
fed.

How it works:

- **Markov chain over notes.** The last *k* notes (pitch and duration) form
  the state key. Raw transition counts are kept across training calls and
  normalized on every query, so incremental training accumulates correctly.
- **Constraint layer.** Proposals must be in the scale and inside the pitch
  range. When the model has nothing to offer, a random walk steps from the
  previous pitch, clamps to the range and snaps to the scale.
- **Leap repair.** After generation, leaps wider than the complexity allows
  are pulled in.
- **Beat-based timing.** Notes are placed in beats; tempo only matters at
  playback and export.

Around the core:

- **Export.** Standard MIDI files (format 0, 96 ticks per quarter) via
  ``mido``, and minimal MusicXML.
- **Playback.** Real-time MIDI output to any ``mido`` port.
- **Persistence.** In-memory or JSON-per-melody directory stores.
- **CLI.** ``python -m melodist --config config.yaml --export out.mid``.

Minimal example:

    ```python
    import random
    import melodist

    generator = melodist.MelodyGenerator(rng=random.Random(1))

    params = melodist.GenerationParams(
        length = 2,
        complexity = 0.4,
        rhythm_density = 0.7,
        range = (60, 79),
        scale = melodist.scale_of(9, "minor"),
    )

    melody = generator.generate(params)
    generator.train_from_melody(melody)

    with open("melody.mid", "wb") as f:
        f.write(melodist.export_melody(melody, "midi"))
    ```

Package-level exports: ``MelodyGenerator``, ``TransitionModel``, ``GenerationParams``,
``GeneratedMelody``, ``Note``, ``Scale``, ``Chord``, ``scale_of``, ``export_melody``.
"""

import melodist.chords
import melodist.export
import melodist.generator
import melodist.intervals
import melodist.markov_chain
import melodist.melody


MelodyGenerator = melodist.generator.MelodyGenerator
TransitionModel = melodist.markov_chain.TransitionModel
GenerationParams = melodist.melody.GenerationParams
GeneratedMelody = melodist.melody.GeneratedMelody
Note = melodist.melody.Note
Scale = melodist.intervals.Scale
Chord = melodist.chords.Chord
scale_of = melodist.intervals.scale_of
export_melody = melodist.export.export_melody
