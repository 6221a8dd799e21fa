from shrimpcheck.alerts import AlertPhase, AlertSettings, AlertTransition, AudioCommand
from shrimpcheck.config import AppConfig
from shrimpcheck.landmarks.face_oval import simplify_face
from shrimpcheck.landmarks.types import HolisticFrame
from shrimpcheck.monitor import MonitorSettings, PostureMonitor
from shrimpcheck.posture import MatchReason, PostureLabel, PostureStatus, ReferencePosture


def _monitor(scheduler, events=None, actions=None, logs=None):
	return PostureMonitor(
		scheduler=scheduler,
		clock=scheduler.clock,
		on_event=(events.append if events is not None else None),
		on_audio=(actions.append if actions is not None else None),
		logger=(logs.append if logs is not None else None),
	)


def _refs(face):
	return (
		ReferencePosture(simplify_face(face(offset=-0.1)), PostureLabel.CORRECT),
		ReferencePosture(simplify_face(face(offset=0.1)), PostureLabel.INCORRECT),
	)


def test_bad_posture_fires_after_timeout(scheduler, face):
	events, actions = [], []
	monitor = _monitor(scheduler, events, actions)
	refs = _refs(face)
	settings = MonitorSettings()
	frame = HolisticFrame(face=tuple(face(offset=0.1)))

	result = monitor.process_frame(frame, refs, settings)
	assert result.classification.best_index == 1
	assert result.status is PostureStatus.BAD
	assert [e.transition for e in result.events] == [AlertTransition.ARMED]

	scheduler.advance(10.0)
	assert monitor.posture_alert.phase is AlertPhase.FIRING
	assert events[-1].transition is AlertTransition.START
	assert [a.command for a in actions] == [AudioCommand.PLAY]

	good = monitor.process_frame(HolisticFrame(face=tuple(face(offset=-0.1))), refs, settings)
	assert good.status is PostureStatus.GOOD
	assert [e.transition for e in good.events] == [AlertTransition.STOP]
	assert [a.command for a in actions] == [AudioCommand.PLAY, AudioCommand.PAUSE]


def test_absent_face_clears_posture_alert(scheduler, face):
	monitor = _monitor(scheduler)
	refs = _refs(face)
	monitor.process_frame(HolisticFrame(face=tuple(face(offset=0.1))), refs, MonitorSettings())
	result = monitor.process_frame(HolisticFrame(), refs, MonitorSettings())
	assert result.classification.reason is MatchReason.ABSENT
	assert result.status is PostureStatus.GONE
	assert result.contour is None
	assert monitor.last_contour is None
	assert monitor.posture_alert.phase is AlertPhase.IDLE


def test_no_references(scheduler, face):
	monitor = _monitor(scheduler)
	result = monitor.process_frame(HolisticFrame(face=tuple(face())), (), MonitorSettings())
	assert result.status is PostureStatus.NO_REFERENCES
	assert result.classification.best_index is None


def test_hand_overlap_uses_simplified_contour(scheduler, face, hand):
	events = []
	monitor = _monitor(scheduler, events)
	frame = HolisticFrame(face=tuple(face()), right_hand=tuple(hand(tip=(0.5, 0.5))))
	result = monitor.process_frame(frame, (), MonitorSettings())
	assert result.hand_overlap
	scheduler.advance(1.0)
	assert monitor.hand_alert.phase is AlertPhase.FIRING
	assert events[-1].channel == "hand"
	assert events[-1].volume == 0.25


def test_master_switch_disables_both_channels(scheduler, face, hand):
	monitor = _monitor(scheduler)
	refs = _refs(face)
	frame = HolisticFrame(face=tuple(face(offset=0.1)), left_hand=tuple(hand(tip=(0.6, 0.5))))
	off = MonitorSettings(enabled=False)
	result = monitor.process_frame(frame, refs, off)
	assert result.events == []
	assert scheduler.pending == 0


def test_disabling_one_channel_keeps_the_other(scheduler, face, hand):
	monitor = _monitor(scheduler)
	refs = _refs(face)
	frame = HolisticFrame(face=tuple(face(offset=0.1)), left_hand=tuple(hand(tip=(0.6, 0.5))))
	monitor.process_frame(frame, refs, MonitorSettings())
	no_hand = MonitorSettings(hand=AlertSettings(False, 1.0, 0.25))
	monitor.process_frame(frame, refs, no_hand)
	assert monitor.hand_alert.phase is AlertPhase.IDLE
	assert monitor.posture_alert.phase is AlertPhase.ARMED
	scheduler.advance(10.0)
	assert monitor.posture_alert.phase is AlertPhase.FIRING


def test_settings_from_config():
	settings = MonitorSettings.from_config(AppConfig())
	assert settings.posture == AlertSettings(True, 10.0, 1.0)
	assert settings.hand == AlertSettings(True, 1.0, 0.25)


def test_logs_status_changes(scheduler, face):
	logs = []
	monitor = _monitor(scheduler, logs=logs)
	monitor.process_frame(HolisticFrame(face=tuple(face())), (), MonitorSettings())
	monitor.process_frame(HolisticFrame(face=tuple(face())), (), MonitorSettings())
	assert sum(1 for m in logs if m.startswith("[Posture] no_references")) == 1
