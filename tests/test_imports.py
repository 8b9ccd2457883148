def test_import():
    import bubblelab

    assert bubblelab.__version__ == "0.1.0"


def test_public_api_imports() -> None:
    from bubblelab.content.article import ArticleText, Language, article_text
    from bubblelab.geometry.steiner import Mode, compute_layout, junction_angles
    from bubblelab.lab.simulator import (
        MechanicsSession,
        build_visual_frame,
        run_valve_simulation,
        summarize_run,
    )
    from bubblelab.mechanics.model import (
        BubblePair,
        FlowDirection,
        FlowStep,
        laplace_pressure,
        reset_pair,
        step,
    )
    from bubblelab.optics.thin_film import FilmBand, color_for, film_caption, film_sample

    assert BubblePair is not None
    assert FlowStep is not None
    assert FlowDirection is not None
    assert laplace_pressure is not None
    assert step is not None
    assert reset_pair is not None
    assert Mode is not None
    assert compute_layout is not None
    assert junction_angles is not None
    assert FilmBand is not None
    assert color_for is not None
    assert film_sample is not None
    assert film_caption is not None
    assert MechanicsSession is not None
    assert run_valve_simulation is not None
    assert summarize_run is not None
    assert build_visual_frame is not None
    assert Language is not None
    assert ArticleText is not None
    assert article_text is not None
