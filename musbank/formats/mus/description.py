"""
SoundFont text description of a bank.

Renders the [Samples]/[Instruments]/[Presets]/[Info] text format read by
SoundFont text compilers, plus the loop-info listing for looping waves.
Bank values are converted to SoundFont units on the way out.
"""

import math
from typing import List

from musbank.models.bank import MusBank
from musbank.utils.names import unique_names

NEWLINE = "\r\n"


def secs_to_timecent(seconds: float) -> int:
    """Seconds to timecents, clamped at 1 ms."""
    return int(1200.0 * math.log2(max(seconds, 0.001)))


def semitone_tuning(note: int) -> int:
    """Whole semitones of an 8.8 fixed-point pitch offset."""
    return int(note / 256)


def cents_tuning(note: int) -> int:
    """Cents part of an 8.8 fixed-point pitch offset."""
    return int(math.fmod(note, 256) * 100 / 256)


def pan_convert(pan: float) -> int:
    """Pan in 0.0-1.0 to SoundFont pan (-500 to 500)."""
    return int(pan * 1000.0 - 500.0)


def percentage_to_decibels(percentage: float, factor: float) -> int:
    """Attenuation percentage to centibels, scaled by factor."""
    return int(-(10.0 * math.log10(max(percentage, 0.001) / 100.0)) * factor)


def render_loop_info(bank: MusBank) -> str:
    """List "<loop begin> <loop end - 1> <name>.wav" for each looping wave."""
    names = unique_names(wave.name for wave in bank.waves)
    return "".join(
        f"{wave.loop_begin} {wave.loop_end - 1} {name}.wav\n"
        for wave, name in zip(bank.waves, names)
        if wave.loops
    )


def render_description(bank: MusBank, title: str) -> str:
    """
    Render the SoundFont text description.

    Args:
        bank: Decoded bank
        title: Bank name written to the [Info] section

    Returns:
        Text with CRLF line endings
    """
    names = unique_names(wave.name for wave in bank.waves)

    def sample_name(index: int) -> str:
        return names[index] if 0 <= index < len(names) else bank.wave_name(index)

    out: List[str] = ["[Samples]"]
    for wave, name in zip(bank.waves, names):
        out.append(f"{NEWLINE}    SampleName={name}{NEWLINE}")
        out.append(f"        SampleRate={wave.sample_rate}{NEWLINE}")
        out.append(f"        Key={wave.root_key}{NEWLINE}")
        out.append(f"        FineTune=0{NEWLINE}")
        out.append(f"        Type=1{NEWLINE}")

    out.append(f"{NEWLINE}{NEWLINE}[Instruments]{NEWLINE}")
    for program in bank.programs:
        out.append(f"{NEWLINE}    InstrumentName={program.name}{NEWLINE}")
        for zone in program.zones:
            fields = [
                ("Z_coarseTune", semitone_tuning(zone.pitch_finetuning)),
                ("Z_fineTune", cents_tuning(zone.pitch_finetuning)),
                ("Z_reverbEffectsSend", zone.reverb * 10),
                ("Z_pan", pan_convert(zone.pan_position)),
                ("Z_keynumToVolEnvHold", zone.keynum_hold),
                ("Z_keynumToVolEnvDecay", zone.keynum_decay),
                ("Z_attackVolEnv", secs_to_timecent(zone.volume_env.attack)),
                ("Z_decayVolEnv", secs_to_timecent(zone.volume_env.decay)),
                ("Z_sustainVolEnv", percentage_to_decibels(zone.volume_env.sustain, 10.0)),
                ("Z_releaseVolEnv", secs_to_timecent(zone.volume_env.release)),
                ("Z_delayVolEnv", secs_to_timecent(zone.volume_env.delay)),
                ("Z_delayModEnv", secs_to_timecent(zone.modul_env.delay)),
                (
                    "Z_initialAttenuation",
                    percentage_to_decibels(100.0 - zone.volume_env_atten, 25.0),
                ),
                ("Z_delayVibLFO", secs_to_timecent(zone.vib_delay)),
                ("Z_freqVibLFO", secs_to_timecent(zone.vib_frequency / 8.176)),
                ("Z_vibLfoToPitch", int(zone.vib_to_pitch)),
                ("Z_LowKey", zone.note_low),
                ("Z_HighKey", zone.note_high),
                ("Z_LowVelocity", zone.velocity_low),
                ("Z_HighVelocity", zone.velocity_high),
                ("Z_attackModEnv", secs_to_timecent(zone.modul_env.attack)),
                ("Z_decayModEnv", secs_to_timecent(zone.modul_env.decay)),
                ("Z_sustainModEnv", int(zone.modul_env.sustain * 10.0)),
                ("Z_releaseModEnv", secs_to_timecent(zone.modul_env.release)),
                ("Z_modEnvToPitch", int(zone.modul_env_to_pitch)),
            ]
            if zone.root_key != -1:
                fields.append(("Z_overridingRootKey", zone.root_key))
            loop_info = (
                bank.waves[zone.wave_index].loop_info if 0 <= zone.wave_index < len(bank.waves) else 0
            )
            fields.append(("Z_sampleModes", loop_info))

            out.append(f"{NEWLINE}        Sample={sample_name(zone.wave_index)}{NEWLINE}")
            for key, value in fields:
                out.append(f"            {key}={value}{NEWLINE}")

        out.append(f"{NEWLINE}        GlobalZone{NEWLINE}{NEWLINE}")

    out.append(f"{NEWLINE}[Presets]{NEWLINE}")
    for preset in bank.presets:
        out.append(f"{NEWLINE}{NEWLINE}    PresetName={preset.name}{NEWLINE}")
        out.append(f"        Bank={preset.midi_bank_number}{NEWLINE}")
        out.append(f"        Program={preset.midi_preset_number}{NEWLINE}{NEWLINE}")
        for zone in preset.zones:
            out.append(f"        Instrument={bank.program_name(zone.program_index)}{NEWLINE}")
            out.append(f"            L_LowKey={zone.note_low}{NEWLINE}")
            out.append(f"            L_HighKey={zone.note_high}{NEWLINE}")
            out.append(f"            L_LowVelocity={zone.velocity_low}{NEWLINE}")
            out.append(f"            L_HighVelocity={zone.velocity_high}{NEWLINE}")
            out.append(f"{NEWLINE}        GlobalLayer{NEWLINE}")

    out.append(f"{NEWLINE}{NEWLINE}[Info]{NEWLINE}")
    out.append(f"Version=2.1{NEWLINE}")
    out.append(f"Engine=EMU8000{NEWLINE}")
    out.append(f"Name={title}{NEWLINE}")
    out.append(f"Editor=musbank{NEWLINE}")

    return "".join(out)
